from django.db import models

# 메뉴 항목 (메뉴 이름 + 부모-자식 구조)
# 하나의 사이트에 여러 메뉴(main, footer 등)가 독립적으로 존재
class MenuItem(models.Model):
    id = models.BigAutoField(primary_key=True)
    menu = models.CharField(max_length=50, db_index=True, default="main")  # 'main', 'footer' 등
    title = models.CharField(max_length=200)
    slug = models.CharField(max_length=200, blank=True, null=True)  # 내부 경로
    url = models.CharField(max_length=500, blank=True, null=True)  # 외부 URL 또는 절대 경로
    icon = models.CharField(max_length=100, blank=True, null=True)
    order = models.PositiveIntegerField(default=0)
    parent = models.ForeignKey("self", related_name="children", on_delete=models.CASCADE, blank=True, null=True)
    page_id = models.CharField(max_length=100, blank=True, null=True)  # 연결된 페이지 (참조만)
    is_external = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "menu_item"
        ordering = ["menu", "order", "created_at"]

    def __str__(self):
        return f"[{self.menu}] {self.title}"

    def to_record(self):
        """트리 빌더 입력용 평면 레코드"""
        return {
            "id": self.id,
            "menu": self.menu,
            "title": self.title,
            "slug": self.slug,
            "url": self.url,
            "icon": self.icon,
            "order": self.order,
            "parent_id": self.parent_id,
            "page_id": self.page_id,
        }
