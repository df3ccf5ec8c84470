from rest_framework import serializers

from utils.validators import validate_menu_name, validate_menu_slug, validate_menu_url
from .models import MenuItem


# 정의되지 않은 필드가 들어오면 거부
class StrictFieldsMixin:
    def to_internal_value(self, data):
        if hasattr(data, "keys"):
            unknown = set(data.keys()) - set(self.fields.keys())
            if unknown:
                raise serializers.ValidationError(
                    {field: "허용되지 않은 필드입니다." for field in sorted(unknown)}
                )
        return super().to_internal_value(data)


# 프론트(대시보드)에 내려줄 형태
class MenuItemSerializer(serializers.ModelSerializer):
    parent_id = serializers.IntegerField(read_only=True, allow_null=True)

    class Meta:
        model = MenuItem
        fields = [
            "id",
            "menu",
            "title",
            "slug",
            "url",
            "icon",
            "order",
            "parent_id",
            "page_id",
            "is_external",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


# 메뉴 항목 생성
class MenuItemCreateSerializer(StrictFieldsMixin, serializers.Serializer):
    menu = serializers.CharField(max_length=50, validators=[validate_menu_name])
    title = serializers.CharField(min_length=2, max_length=200)
    slug = serializers.CharField(max_length=200, required=False, allow_blank=True, validators=[validate_menu_slug])
    url = serializers.CharField(max_length=500, required=False, trim_whitespace=True, validators=[validate_menu_url])
    icon = serializers.CharField(max_length=100, required=False, allow_blank=True)
    order = serializers.IntegerField(min_value=0, required=False)
    parent_id = serializers.IntegerField(required=False, allow_null=True)
    page_id = serializers.CharField(max_length=100, required=False, allow_null=True)
    is_external = serializers.BooleanField(required=False)


# 메뉴 항목 수정 (부분 수정, 빈 문자열은 값 삭제)
class MenuItemUpdateSerializer(StrictFieldsMixin, serializers.Serializer):
    title = serializers.CharField(min_length=2, max_length=200, required=False)
    slug = serializers.CharField(max_length=200, required=False, allow_blank=True, validators=[validate_menu_slug])
    url = serializers.CharField(max_length=500, required=False, allow_blank=True)
    icon = serializers.CharField(max_length=100, required=False, allow_blank=True)
    order = serializers.IntegerField(min_value=0, required=False)
    parent_id = serializers.IntegerField(required=False, allow_null=True)
    page_id = serializers.CharField(max_length=100, required=False, allow_null=True)
    is_external = serializers.BooleanField(required=False)

    def validate_url(self, value):
        if not value.strip():
            return ""
        return validate_menu_url(value)


# 재정렬 항목 1건 (flatten_menu_tree 결과 형식)
class MenuReorderItemSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    order = serializers.IntegerField(min_value=0)
    parent_id = serializers.IntegerField(required=False, allow_null=True, default=None)


# 대시보드 일괄 재정렬 (PATCH /api/menus/)
class MenuBulkReorderSerializer(serializers.Serializer):
    items = MenuReorderItemSerializer(many=True)


# 메뉴 단위 재정렬 (POST /api/menus/reorder/)
class MenuReorderSerializer(serializers.Serializer):
    menu = serializers.CharField(min_length=1, max_length=50)
    items = MenuReorderItemSerializer(many=True, allow_empty=False)


# 공개 메뉴 트리 노드 (href 포함)
class MenuTreeNodeSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    menu = serializers.CharField()
    title = serializers.CharField()
    slug = serializers.CharField(allow_null=True)
    url = serializers.CharField(allow_null=True)
    icon = serializers.CharField(allow_null=True)
    order = serializers.IntegerField()
    page_id = serializers.CharField(allow_null=True)
    href = serializers.CharField()
    children = serializers.SerializerMethodField()

    def get_children(self, obj):
        return MenuTreeNodeSerializer(obj.get("children", []), many=True).data
