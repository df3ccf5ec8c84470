from django.core.management.base import BaseCommand
from django.db import transaction

from apps.menus.models import MenuItem


DEFAULT_MENUS = [
    {"menu": "main", "title": "Home", "url": "/", "order": 0},
    {"menu": "main", "title": "Articles", "url": "/articles", "order": 1},
    {"menu": "main", "title": "About", "url": "/about", "order": 2},
    {"menu": "footer", "title": "Contact", "url": "/contact", "order": 0},
]


class Command(BaseCommand):
    help = 'Register default site menus (main, footer)'

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write("="*60)
        self.stdout.write("Default Menus Registration")
        self.stdout.write("="*60)

        created_count = 0
        for item_data in DEFAULT_MENUS:
            item, created = MenuItem.objects.get_or_create(
                menu=item_data['menu'],
                title=item_data['title'],
                parent=None,
                defaults={
                    'url': item_data['url'],
                    'order': item_data['order'],
                    'is_external': False,
                }
            )
            if created:
                created_count += 1
            self.stdout.write(f"  {'Created' if created else 'Exists'}: [{item.menu}] {item.title} -> {item.url}")

        self.stdout.write(self.style.SUCCESS(f"\n완료: {created_count}개 생성, {len(DEFAULT_MENUS) - created_count}개 기존 항목 유지"))
