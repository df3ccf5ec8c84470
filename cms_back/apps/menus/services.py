import logging
import re

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.db import transaction

from apps.audit.services import write_audit_log
from utils.exceptions import ValidationException, ResourceNotFoundException
from .models import MenuItem
from .utils import build_menu_tree

logger = logging.getLogger(__name__)


# 특정 메뉴의 평면 레코드 목록 조회
def get_menu_items(menu):
    items = (
        MenuItem.objects
        .filter(menu=menu)
        .order_by("parent_id", "order", "created_at")
    )
    return [item.to_record() for item in items]


# 특정 메뉴의 트리 조회 (요청마다 새로 생성, 캐시 없음)
def get_menu_tree(menu):
    return build_menu_tree(get_menu_items(menu))


# 메뉴 이름 목록 (대시보드 메뉴 선택용)
def get_menu_names():
    return list(
        MenuItem.objects
        .order_by("menu")
        .values_list("menu", flat=True)
        .distinct()
    )


def get_menu_item(item_id):
    try:
        return MenuItem.objects.get(pk=item_id)
    except MenuItem.DoesNotExist:
        raise ResourceNotFoundException(message="메뉴 항목을 찾을 수 없습니다.")


# ==================================================
# 변경 알림 (WebSocket)
# ==================================================
def get_menu_group_name(menu):
    """Channels 그룹 이름 (영문, 숫자, -, _, . 만 허용)"""
    return "menu_" + re.sub(r"[^A-Za-z0-9_\-.]", "_", menu)[:80]


def notify_menu_changed(menu):
    """메뉴 변경 시 구독 중인 클라이언트에게 MENU_CHANGED 이벤트 전송"""
    channel_layer = get_channel_layer()
    if not channel_layer:
        return

    async_to_sync(channel_layer.group_send)(
        get_menu_group_name(menu),
        {
            "type": "menu_changed",
            "menu": menu,
        }
    )
    logger.debug(f"메뉴 변경 알림 전송: {menu}")


def _notify_on_commit(menu):
    transaction.on_commit(lambda: notify_menu_changed(menu))


# ==================================================
# 무결성 검증
# ==================================================
def _validate_parent(parent_id, menu):
    if parent_id is None:
        return None
    parent = MenuItem.objects.filter(pk=parent_id).first()
    if parent is None or parent.menu != menu:
        raise ValidationException(message="상위 메뉴가 올바르지 않습니다.", field="parent_id")
    return parent


def _validate_link_target(url, page_id):
    if url and page_id:
        raise ValidationException(
            message="사용자 지정 URL과 페이지 연결 중 하나만 선택해주세요.",
            field="url",
        )


def _has_cycle(parent_map):
    """parent_map(id -> parent_id) 에 순환 참조가 있는지 확인"""
    checked = set()
    for start in parent_map:
        path = set()
        current = start
        while current is not None and current not in checked:
            if current in path:
                return True
            path.add(current)
            current = parent_map.get(current)
        checked.update(path)
    return False


def _clean_optional(value):
    """빈 문자열은 None, 그 외에는 앞뒤 공백 제거"""
    if value is None:
        return None
    value = value.strip()
    return value or None


# ==================================================
# 생성 / 수정 / 삭제 / 재정렬
# ==================================================
@transaction.atomic
def create_menu_item(data, request=None):
    menu = data["menu"]
    url = _clean_optional(data.get("url"))
    page_id = data.get("page_id")

    parent = _validate_parent(data.get("parent_id"), menu)
    _validate_link_target(url, page_id)

    item = MenuItem.objects.create(
        menu=menu,
        title=data["title"],
        slug=_clean_optional(data.get("slug")),
        url=url,
        icon=_clean_optional(data.get("icon")),
        order=data.get("order") or 0,
        parent=parent,
        page_id=page_id,
        is_external=data.get("is_external", bool(url)),
    )

    write_audit_log(
        request,
        action="MENU_ITEM_CREATE",
        entity="MenuItem",
        entity_id=item.id,
        metadata={"menu": item.menu, "title": item.title},
    )
    _notify_on_commit(item.menu)
    return item


@transaction.atomic
def update_menu_item(item, data, request=None):
    if "parent_id" in data:
        parent_id = data["parent_id"]
        if parent_id is not None:
            _validate_parent(parent_id, item.menu)
            parent_map = dict(
                MenuItem.objects.filter(menu=item.menu).values_list("id", "parent_id")
            )
            parent_map[item.id] = parent_id
            if _has_cycle(parent_map):
                raise ValidationException(
                    message="자기 자신 또는 하위 메뉴를 상위 메뉴로 지정할 수 없습니다.",
                    field="parent_id",
                )
        item.parent_id = parent_id

    url = _clean_optional(data["url"]) if "url" in data else item.url
    page_id = data["page_id"] if "page_id" in data else item.page_id
    if data.get("url") and data.get("page_id"):
        _validate_link_target(url, page_id)

    if "title" in data:
        item.title = data["title"]
    for field in ("slug", "icon"):
        if field in data:
            setattr(item, field, _clean_optional(data[field]))
    if "order" in data:
        item.order = data["order"]

    item.url = url
    item.page_id = page_id

    if "is_external" in data:
        item.is_external = data["is_external"]
    elif data.get("url"):
        item.is_external = True
    elif data.get("page_id"):
        item.is_external = False

    item.save()

    write_audit_log(
        request,
        action="MENU_ITEM_UPDATE",
        entity="MenuItem",
        entity_id=item.id,
        metadata={"menu": item.menu, "title": item.title},
    )
    _notify_on_commit(item.menu)
    return item


@transaction.atomic
def delete_menu_item(item, request=None):
    """메뉴 항목 삭제 (하위 항목은 CASCADE 로 함께 삭제)"""
    item_id = item.id
    menu = item.menu
    deleted, _ = item.delete()

    write_audit_log(
        request,
        action="MENU_ITEM_DELETE",
        entity="MenuItem",
        entity_id=item_id,
        metadata={"menu": menu, "deleted": deleted},
    )
    _notify_on_commit(menu)
    return deleted


@transaction.atomic
def reorder_menu_items(items, request=None, menu=None):
    """
    메뉴 항목 순서/계층 일괄 변경

    Args:
        items: [{"id", "order", "parent_id"}] 목록 (flatten_menu_tree 결과 형식)
        menu: 메뉴 이름 (없으면 항목들이 속한 메뉴로 결정)

    모든 항목과 상위 항목은 같은 메뉴에 속해야 하며,
    변경 결과에 순환 참조가 있으면 아무것도 저장하지 않는다.
    """
    if not items:
        raise ValidationException(message="변경할 메뉴 항목이 없습니다.", field="items")

    ids = [entry["id"] for entry in items]
    existing = {
        item.id: item
        for item in MenuItem.objects.select_for_update().filter(pk__in=ids)
    }
    missing = [item_id for item_id in ids if item_id not in existing]
    if missing:
        raise ResourceNotFoundException(
            message="메뉴 항목을 찾을 수 없습니다.",
            detail={"ids": missing},
        )

    menus = {item.menu for item in existing.values()}
    if menu is None and len(menus) == 1:
        menu = menus.pop()
    if menu is None or menus - {menu}:
        raise ValidationException(message="다른 메뉴의 항목은 함께 변경할 수 없습니다.", field="items")

    parent_map = dict(MenuItem.objects.filter(menu=menu).values_list("id", "parent_id"))
    for entry in items:
        parent_id = entry.get("parent_id")
        if parent_id is not None and parent_id not in parent_map:
            raise ValidationException(message="상위 메뉴가 올바르지 않습니다.", field="parent_id")
        parent_map[entry["id"]] = parent_id

    if _has_cycle(parent_map):
        raise ValidationException(message="메뉴 계층에 순환 참조가 있습니다.", field="items")

    for entry in items:
        item = existing[entry["id"]]
        item.parent_id = entry.get("parent_id")
        item.order = entry["order"]
        item.save(update_fields=["parent", "order", "updated_at"])

    write_audit_log(
        request,
        action="MENU_ITEM_REORDER",
        entity="MenuItem",
        entity_id=menu,
        metadata={"menu": menu, "total": len(items)},
    )
    _notify_on_commit(menu)
    return len(items)
