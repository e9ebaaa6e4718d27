from django.core.management.base import BaseCommand

from skills.constants import PREDEFINED_SKILLS
from skills.services import SkillService


class Command(BaseCommand):
    help = "Seeds the skill catalog with the predefined skills"

    def handle(self, *args, **options):
        result = SkillService.seed_catalog()
        created = result.data
        updated = len(PREDEFINED_SKILLS) - created

        self.stdout.write(self.style.SUCCESS(f"Created {created} skills"))
        if updated:
            self.stdout.write(self.style.WARNING(f"Updated {updated} existing skills"))
