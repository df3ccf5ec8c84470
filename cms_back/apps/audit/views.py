from rest_framework import generics, filters
from rest_framework.pagination import PageNumberPagination
from django_filters.rest_framework import DjangoFilterBackend
from django_filters import FilterSet, CharFilter, ChoiceFilter, DateFilter

from apps.common.permission import IsAdmin
from .models import AuditLog
from .serializers import AuditLogSerializer


class AuditLogPagination(PageNumberPagination):
    """감사 로그 페이지네이션"""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class AuditLogFilter(FilterSet):
    """감사 로그 필터"""
    user_login_id = CharFilter(field_name='user__login_id', lookup_expr='icontains')
    action = ChoiceFilter(choices=AuditLog.ACTION_CHOICES)
    entity = CharFilter(field_name='entity', lookup_expr='exact')
    entity_id = CharFilter(field_name='entity_id', lookup_expr='exact')
    date_from = DateFilter(field_name='created_at', lookup_expr='date__gte')
    date_to = DateFilter(field_name='created_at', lookup_expr='date__lte')

    class Meta:
        model = AuditLog
        fields = ['user_login_id', 'action', 'entity', 'entity_id', 'date_from', 'date_to']


class AuditLogListView(generics.ListAPIView):
    """
    감사 로그 목록 조회 API
    - 관리자 전용
    - 필터: user_login_id, action, entity, entity_id, date_from, date_to
    - 정렬: created_at (기본 내림차순)
    """
    queryset = AuditLog.objects.select_related('user').order_by('-created_at', '-id')
    serializer_class = AuditLogSerializer
    permission_classes = [IsAdmin]
    pagination_class = AuditLogPagination
    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]
    filterset_class = AuditLogFilter
    ordering_fields = ['created_at', 'action']
    ordering = ['-created_at', '-id']
