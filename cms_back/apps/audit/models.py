from django.conf import settings
from django.db import models


class AuditLog(models.Model):
    """관리 작업 감사 로그 (로그인, 메뉴 생성/수정/삭제/재정렬)"""
    ACTION_CHOICES = (
        ("LOGIN_SUCCESS", "Login Success"),  # 로그인 성공
        ("MENU_ITEM_CREATE", "Menu Item Create"),  # 메뉴 항목 생성
        ("MENU_ITEM_UPDATE", "Menu Item Update"),  # 메뉴 항목 수정
        ("MENU_ITEM_DELETE", "Menu Item Delete"),  # 메뉴 항목 삭제 (하위 항목 포함)
        ("MENU_ITEM_REORDER", "Menu Item Reorder"),  # 메뉴 순서/계층 변경
    )

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="audit_logs",
    )

    action = models.CharField(max_length=30, choices=ACTION_CHOICES)
    entity = models.CharField(max_length=50)  # MenuItem, Menu, User
    entity_id = models.CharField(max_length=100)  # PK 또는 메뉴 이름
    metadata = models.JSONField(null=True, blank=True)

    ip_address = models.GenericIPAddressField(null=True, blank=True)
    user_agent = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'audit_log'
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['-created_at'], name='audit_log_created_idx'),
            models.Index(fields=['entity', 'entity_id'], name='audit_log_entity_idx'),
            models.Index(fields=['action'], name='audit_log_action_idx'),
        ]

    def __str__(self):
        return f"{self.action} - {self.entity}:{self.entity_id} - {self.user}"
