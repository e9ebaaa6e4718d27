"""
Skill views.

Endpoints:
    GET /api/v1/skills/            - Catalog (optionally ?category=)
    PUT /api/v1/me/skills/         - Replace caller's owned/desired skills
"""

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import generics
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from core.views import error_response
from skills.models import Skill
from skills.serializers import SkillReplaceSerializer, SkillSerializer, split_user_skills
from skills.services import SkillService


@extend_schema(
    operation_id="list_skills",
    summary="List skill catalog",
    parameters=[
        OpenApiParameter(
            "category", OpenApiTypes.STR, description="Filter by category"
        ),
    ],
    tags=["Skills"],
)
class SkillListView(generics.ListAPIView):
    """Skill catalog, ordered by category then name."""

    serializer_class = SkillSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = None

    def get_queryset(self):
        queryset = Skill.objects.all()
        category = self.request.query_params.get("category")
        if category:
            queryset = queryset.filter(category__iexact=category)
        return queryset


class MySkillsView(APIView):
    """Replace the caller's owned and/or desired skills."""

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="replace_my_skills",
        summary="Replace my skills",
        request=SkillReplaceSerializer,
        tags=["Skills"],
    )
    def put(self, request):
        serializer = SkillReplaceSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = SkillService.replace_user_skills(
            request.user,
            owned=serializer.validated_data.get("ownedSkills"),
            desired=serializer.validated_data.get("desiredSkills"),
        )
        if not result.success:
            return error_response(result)

        owned, desired = split_user_skills(request.user)
        return Response({"owned_skills": owned, "desired_skills": desired})
