"""
Admin panel API.

Back-office endpoints for platform admins (users holding the "admin"
role, or staff): user CRUD with profile and skills in one payload, and
skill catalog maintenance.
"""
