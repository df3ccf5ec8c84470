from django.urls import path
from .views import AuditLogListView

urlpatterns = [
    # 감사 로그 (로그인, 메뉴 변경)
    path('', AuditLogListView.as_view(), name='audit-log-list'),
]
