from django.urls import path

from .views import (
    MenuItemListView,
    MenuNameListView,
    MenuItemDetailView,
    MenuReorderView,
    MenuTreeView,
)

# 메뉴 API 엔드포인트 정의
urlpatterns = [
    # 대시보드 (관리자)
    path("", MenuItemListView.as_view(), name="menu-item-list"), # 목록, 생성, 일괄 재정렬
    path("names/", MenuNameListView.as_view(), name="menu-name-list"), # 메뉴 이름 목록
    path("reorder/", MenuReorderView.as_view(), name="menu-reorder"), # 메뉴 단위 재정렬
    path("<int:pk>/", MenuItemDetailView.as_view(), name="menu-item-detail"), # 상세, 수정, 삭제

    # 공개 메뉴 트리
    path("<str:menu>/tree/", MenuTreeView.as_view(), name="menu-tree"),
]
