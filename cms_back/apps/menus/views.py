from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.common.permission import IsAdmin
from .models import MenuItem
from .serializers import (
    MenuItemSerializer,
    MenuItemCreateSerializer,
    MenuItemUpdateSerializer,
    MenuBulkReorderSerializer,
    MenuReorderSerializer,
    MenuTreeNodeSerializer,
)
from .services import (
    get_menu_item,
    get_menu_names,
    get_menu_tree,
    create_menu_item,
    update_menu_item,
    delete_menu_item,
    reorder_menu_items,
)
from .utils import annotate_menu_hrefs

DEFAULT_MENU = "main"


# 대시보드 메뉴 항목 목록 / 생성 / 일괄 재정렬 API (관리자 전용)
class MenuItemListView(APIView):
    permission_classes = [IsAdmin]

    @extend_schema(
        tags=["Menus"],
        summary="메뉴 항목 목록",
        parameters=[OpenApiParameter("menu", str, description="메뉴 이름 (기본값 main)")],
        responses=MenuItemSerializer(many=True),
    )
    def get(self, request):
        menu = request.query_params.get("menu") or DEFAULT_MENU
        items = MenuItem.objects.filter(menu=menu).order_by("parent_id", "order", "created_at")
        return Response({"data": MenuItemSerializer(items, many=True).data})

    @extend_schema(tags=["Menus"], summary="메뉴 항목 생성", request=MenuItemCreateSerializer, responses=MenuItemSerializer)
    def post(self, request):
        serializer = MenuItemCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        item = create_menu_item(serializer.validated_data, request)
        return Response({"data": MenuItemSerializer(item).data}, status=status.HTTP_201_CREATED)

    @extend_schema(tags=["Menus"], summary="메뉴 항목 일괄 재정렬", request=MenuBulkReorderSerializer)
    def patch(self, request):
        serializer = MenuBulkReorderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        reorder_menu_items(serializer.validated_data["items"], request)
        return Response({"message": "메뉴가 수정되었습니다."})


# 메뉴 이름 목록 API (관리자 전용)
class MenuNameListView(APIView):
    permission_classes = [IsAdmin]

    @extend_schema(tags=["Menus"], summary="메뉴 이름 목록")
    def get(self, request):
        return Response({"data": get_menu_names()})


# 메뉴 항목 상세 조회 / 수정 / 삭제 API (관리자 전용)
class MenuItemDetailView(APIView):
    permission_classes = [IsAdmin]

    @extend_schema(tags=["Menus"], summary="메뉴 항목 상세", responses=MenuItemSerializer)
    def get(self, request, pk):
        item = get_menu_item(pk)
        return Response({"data": MenuItemSerializer(item).data})

    @extend_schema(tags=["Menus"], summary="메뉴 항목 수정", request=MenuItemUpdateSerializer, responses=MenuItemSerializer)
    def patch(self, request, pk):
        serializer = MenuItemUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        item = get_menu_item(pk)
        item = update_menu_item(item, serializer.validated_data, request)
        return Response({"data": MenuItemSerializer(item).data})

    @extend_schema(tags=["Menus"], summary="메뉴 항목 삭제 (하위 항목 포함)")
    def delete(self, request, pk):
        item = get_menu_item(pk)
        delete_menu_item(item, request)
        return Response({"message": "메뉴 항목이 삭제되었습니다."})


# 메뉴 단위 재정렬 API (드래그 앤 드롭 결과 저장)
class MenuReorderView(APIView):
    permission_classes = [IsAdmin]

    @extend_schema(tags=["Menus"], summary="메뉴 재정렬", request=MenuReorderSerializer)
    def post(self, request):
        serializer = MenuReorderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        reorder_menu_items(
            serializer.validated_data["items"],
            request,
            menu=serializer.validated_data["menu"],
        )
        return Response({"success": True})


# 공개 메뉴 트리 API (사이트 헤더/푸터 렌더링용)
class MenuTreeView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(tags=["Menus"], summary="메뉴 트리 조회", responses=MenuTreeNodeSerializer(many=True))
    def get(self, request, menu):
        tree = annotate_menu_hrefs(get_menu_tree(menu))
        return Response({
            "menu": menu,
            "items": MenuTreeNodeSerializer(tree, many=True).data,
        })
