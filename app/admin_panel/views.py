"""
Views for the admin panel API.

Every endpoint requires IsPlatformAdmin (the "admin" role or staff).

Endpoints (mounted at /api/v1/admin/):
    GET    users/all/       - All users, newest first
    GET    users/count/     - {"count": n}
    POST   users/create/    - Create a user
    PUT    users/{id}/      - Partial patch of a user
    DELETE users/{id}/      - Delete a user
    GET    skills/          - Catalog with user counts
    POST   skills/seed/     - Seed the catalog
"""

from drf_spectacular.utils import OpenApiResponse, extend_schema, inline_serializer
from rest_framework import serializers, status
from rest_framework.response import Response
from rest_framework.views import APIView

from admin_panel.serializers import (
    AdminDeletedUserSerializer,
    AdminSkillSerializer,
    AdminUserCreateSerializer,
    AdminUserSerializer,
    AdminUserUpdateSerializer,
    SeedResultSerializer,
)
from admin_panel.services import AdminSkillService, AdminUserService
from authentication.backends import IsPlatformAdmin
from core.views import error_response


class AdminAPIView(APIView):
    permission_classes = [IsPlatformAdmin]


class AdminUserListView(AdminAPIView):
    @extend_schema(
        operation_id="admin_list_users",
        summary="List all users",
        responses={200: AdminUserSerializer(many=True)},
        tags=["Admin"],
    )
    def get(self, request):
        users = AdminUserService.list_users()
        return Response(AdminUserSerializer(users, many=True).data)


class AdminUserCountView(AdminAPIView):
    @extend_schema(
        operation_id="admin_count_users",
        summary="Count users",
        responses={
            200: inline_serializer(
                "AdminUserCount", fields={"count": serializers.IntegerField()}
            )
        },
        tags=["Admin"],
    )
    def get(self, request):
        return Response({"count": AdminUserService.count_users()})


class AdminUserCreateView(AdminAPIView):
    @extend_schema(
        operation_id="admin_create_user",
        summary="Create user",
        request=AdminUserCreateSerializer,
        responses={
            201: AdminUserSerializer,
            400: OpenApiResponse(description="Username already exists / invalid data"),
        },
        tags=["Admin"],
    )
    def post(self, request):
        serializer = AdminUserCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = AdminUserService.create_user(serializer.validated_data)
        if not result.success:
            return error_response(result)

        user = AdminUserService.list_users().get(pk=result.data.pk)
        return Response(AdminUserSerializer(user).data, status=status.HTTP_201_CREATED)


class AdminUserDetailView(AdminAPIView):
    @extend_schema(
        operation_id="admin_update_user",
        summary="Update user",
        request=AdminUserUpdateSerializer,
        responses={
            200: AdminUserSerializer,
            404: OpenApiResponse(description="User not found"),
        },
        tags=["Admin"],
    )
    def put(self, request, user_id):
        serializer = AdminUserUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        result = AdminUserService.update_user(user_id, serializer.validated_data)
        if not result.success:
            return error_response(result)

        return Response(AdminUserSerializer(result.data).data)

    @extend_schema(
        operation_id="admin_delete_user",
        summary="Delete user",
        responses={
            200: AdminDeletedUserSerializer,
            404: OpenApiResponse(description="User not found"),
        },
        tags=["Admin"],
    )
    def delete(self, request, user_id):
        result = AdminUserService.delete_user(user_id)
        if not result.success:
            return error_response(result)

        return Response(
            AdminDeletedUserSerializer(
                {"message": "User deleted successfully", "deletedUser": result.data}
            ).data
        )


class AdminSkillListView(AdminAPIView):
    @extend_schema(
        operation_id="admin_list_skills",
        summary="List skills with user counts",
        responses={200: AdminSkillSerializer(many=True)},
        tags=["Admin"],
    )
    def get(self, request):
        skills = AdminSkillService.list_skills()
        return Response(AdminSkillSerializer(skills, many=True).data)


class AdminSkillSeedView(AdminAPIView):
    @extend_schema(
        operation_id="admin_seed_skills",
        summary="Seed skill catalog",
        request=None,
        responses={200: SeedResultSerializer},
        tags=["Admin"],
    )
    def post(self, request):
        result = AdminSkillService.seed()
        return Response(SeedResultSerializer({"created": result.data}).data)
