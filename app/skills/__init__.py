"""
Skills Application

Skill catalog plus the owned/desired skills attached to each user.
"""
