"""
URL configuration for social app.

URL structure (mounted at /api/v1/users/):
    {user_id}/follow/      - Follow (POST) / unfollow (DELETE)
    {user_id}/followers/   - Followers list
    {user_id}/following/   - Following list
"""

from django.urls import path

from social.views import FollowersListView, FollowingListView, FollowView

app_name = "social"

urlpatterns = [
    path("<uuid:user_id>/follow/", FollowView.as_view(), name="follow"),
    path("<uuid:user_id>/followers/", FollowersListView.as_view(), name="followers"),
    path("<uuid:user_id>/following/", FollowingListView.as_view(), name="following"),
]
