import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Skill",
            fields=[
                (
                    "id",
                    models.CharField(
                        help_text="Stable slug identifier (e.g. 'python')",
                        max_length=64,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("name", models.CharField(help_text="Display name", max_length=100)),
                (
                    "category",
                    models.CharField(
                        db_index=True,
                        help_text="Catalog section (e.g. 'Programming')",
                        max_length=50,
                    ),
                ),
                (
                    "icon_name",
                    models.CharField(
                        blank=True,
                        help_text="SF Symbol name used by clients",
                        max_length=100,
                    ),
                ),
            ],
            options={
                "db_table": "skills_skill",
                "ordering": ["category", "name"],
            },
        ),
        migrations.CreateModel(
            name="UserSkill",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        db_index=True,
                        help_text="Timestamp when this record was created",
                    ),
                ),
                (
                    "updated_at",
                    models.DateTimeField(
                        auto_now=True,
                        help_text="Timestamp when this record was last modified",
                    ),
                ),
                (
                    "type",
                    models.CharField(
                        choices=[("owned", "Owned"), ("desired", "Desired")],
                        help_text="Owned or desired",
                        max_length=10,
                    ),
                ),
                (
                    "level",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("Beginner", "Beginner"),
                            ("Intermediate", "Intermediate"),
                            ("Advanced", "Advanced"),
                            ("Expert", "Expert"),
                        ],
                        help_text="Proficiency level (owned skills only)",
                        max_length=20,
                        null=True,
                    ),
                ),
                (
                    "skill",
                    models.ForeignKey(
                        help_text="Catalog skill",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="user_skills",
                        to="skills.skill",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        help_text="User this skill belongs to",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="user_skills",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "skills_user_skill",
                "ordering": ["created_at"],
                "indexes": [
                    models.Index(fields=["user", "type"], name="user_skill_type_idx")
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("user", "skill", "type"),
                        name="unique_user_skill_per_type",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(
                            ("type", "owned"), ("level__isnull", True), _connector="OR"
                        ),
                        name="desired_skill_has_no_level",
                    ),
                ],
            },
        ),
    ]
