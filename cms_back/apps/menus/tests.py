from io import StringIO
from unittest import mock

from asgiref.sync import sync_to_async
from channels.routing import URLRouter
from channels.testing import WebsocketCommunicator
from django.core.management import call_command
from django.test import SimpleTestCase, TestCase, TransactionTestCase
from rest_framework import status
from rest_framework.test import APITestCase

from apps.accounts.models import User, Role
from apps.audit.models import AuditLog
from config.routing import websocket_urlpatterns
from utils.exceptions import ValidationException
from .models import MenuItem
from .services import (
    create_menu_item,
    update_menu_item,
    delete_menu_item,
    reorder_menu_items,
    get_menu_tree,
    notify_menu_changed,
)
from .utils import (
    annotate_menu_hrefs,
    build_menu_tree,
    flatten_menu_tree,
    resolve_menu_href,
)


def make_record(id, order=0, parent_id=None, **extra):
    record = {
        "id": id,
        "menu": "main",
        "title": f"Item {id}",
        "slug": None,
        "url": None,
        "icon": None,
        "order": order,
        "parent_id": parent_id,
        "page_id": None,
    }
    record.update(extra)
    return record


def tree_shape(nodes):
    """(id, 하위 구조) 형태로 트리 구조만 추출"""
    return [(node["id"], tree_shape(node["children"])) for node in nodes]


class BuildMenuTreeTest(SimpleTestCase):
    """메뉴 트리 생성 테스트"""

    def test_children_sorted_by_order(self):
        """형제 노드가 order 오름차순으로 정렬되고 order 가 인덱스로 바뀌는지"""
        records = [
            make_record("a", order=30),
            make_record("b", order=10),
            make_record("c", order=5, parent_id="a"),
            make_record("d", order=2, parent_id="a"),
            make_record("e", order=20),
        ]

        tree = build_menu_tree(records)

        self.assertEqual([node["id"] for node in tree], ["b", "e", "a"])
        self.assertEqual([node["order"] for node in tree], [0, 1, 2])
        children = tree[2]["children"]
        self.assertEqual([node["id"] for node in children], ["d", "c"])
        self.assertEqual([node["order"] for node in children], [0, 1])

    def test_ties_keep_input_order(self):
        """order 가 같으면 입력 순서 유지"""
        records = [make_record("x", order=1), make_record("y", order=1), make_record("z", order=0)]

        tree = build_menu_tree(records)

        self.assertEqual([node["id"] for node in tree], ["z", "x", "y"])

    def test_orphan_becomes_root(self):
        """부모가 입력에 없으면 루트로 취급"""
        records = [
            make_record(1, order=0),
            make_record(2, order=1, parent_id=999),
        ]

        tree = build_menu_tree(records)

        self.assertEqual(tree_shape(tree), [(1, []), (2, [])])

    def test_node_fields(self):
        """노드는 parent_id 대신 children 을 가진다"""
        records = [make_record(1, slug="about", icon="info", page_id="p1")]

        node = build_menu_tree(records)[0]

        self.assertNotIn("parent_id", node)
        self.assertEqual(node["slug"], "about")
        self.assertEqual(node["icon"], "info")
        self.assertEqual(node["page_id"], "p1")
        self.assertEqual(node["children"], [])

    def test_input_not_mutated(self):
        """입력 레코드는 변경되지 않음"""
        records = [make_record(1, order=7), make_record(2, order=3, parent_id=1)]

        build_menu_tree(records)

        self.assertEqual(records[0]["order"], 7)
        self.assertEqual(records[1]["order"], 3)
        self.assertNotIn("children", records[0])

    def test_cycle_is_not_rendered(self):
        """순환 참조 항목은 루트에서 도달할 수 없으므로 트리에 나타나지 않음"""
        records = [
            make_record(1, order=0),
            make_record(2, order=1, parent_id=3),
            make_record(3, order=2, parent_id=2),
            make_record(4, order=3, parent_id=4),
        ]

        tree = build_menu_tree(records)

        self.assertEqual(tree_shape(tree), [(1, [])])

    def test_empty_input(self):
        self.assertEqual(build_menu_tree([]), [])


class FlattenMenuTreeTest(SimpleTestCase):
    """트리 평면화 테스트"""

    def setUp(self):
        self.records = [
            make_record(1, order=4),
            make_record(2, order=1),
            make_record(3, order=9, parent_id=1),
            make_record(4, order=3, parent_id=1),
            make_record(5, order=0, parent_id=4),
            make_record(6, order=2, parent_id=77),
        ]

    def test_pre_order_with_depth(self):
        """부모 다음에 하위 항목이 오고 depth/parent_id 가 계산되는지"""
        flattened = flatten_menu_tree(build_menu_tree(self.records))

        self.assertEqual(
            [(row["id"], row["parent_id"], row["order"], row["depth"]) for row in flattened],
            [
                (2, None, 0, 0),
                (6, None, 1, 0),
                (1, None, 2, 0),
                (4, 1, 0, 1),
                (5, 4, 0, 2),
                (3, 1, 1, 1),
            ],
        )

    def test_round_trip_keeps_structure(self):
        """build -> flatten -> build 결과가 원래 트리와 같은 구조"""
        tree = build_menu_tree(self.records)

        rebuilt = build_menu_tree(flatten_menu_tree(tree))

        self.assertEqual(tree_shape(rebuilt), tree_shape(tree))
        self.assertEqual(rebuilt, tree)

    def test_flattened_rows_keep_fields(self):
        records = [make_record(1, url="https://example.com", icon="home")]

        row = flatten_menu_tree(build_menu_tree(records))[0]

        self.assertEqual(row["url"], "https://example.com")
        self.assertEqual(row["icon"], "home")
        self.assertEqual(row["menu"], "main")


class ResolveMenuHrefTest(SimpleTestCase):
    """메뉴 링크 정규화 테스트"""

    def test_slug_is_prefixed(self):
        self.assertEqual(resolve_menu_href("about", None), "/about")
        self.assertEqual(resolve_menu_href("///news/local", None), "/news/local")

    def test_slug_with_disallowed_characters(self):
        """경로 탐색, 인코딩, 유니코드 slug 거부"""
        self.assertEqual(resolve_menu_href("../../etc/passwd", None), "#")
        self.assertEqual(resolve_menu_href("a%2Fb", None), "#")
        self.assertEqual(resolve_menu_href("beranda-ü", None), "#")
        self.assertEqual(resolve_menu_href("/", None), "#")

    def test_https_url_is_normalized(self):
        """기본 포트 제거"""
        self.assertEqual(
            resolve_menu_href(None, "https://example.com:443/a"),
            "https://example.com/a",
        )
        self.assertEqual(
            resolve_menu_href(None, "http://example.com:8080/a"),
            "http://example.com:8080/a",
        )

    def test_other_allowed_schemes_returned_verbatim(self):
        self.assertEqual(resolve_menu_href(None, "mailto:redaksi@example.com"), "mailto:redaksi@example.com")
        self.assertEqual(resolve_menu_href(None, "tel:+62211234"), "tel:+62211234")
        self.assertEqual(resolve_menu_href(None, "sms:+62211234"), "sms:+62211234")

    def test_disallowed_scheme_rejected(self):
        self.assertEqual(resolve_menu_href(None, "javascript:alert(1)"), "#")
        self.assertEqual(resolve_menu_href(None, "JavaScript:alert(1)"), "#")
        self.assertEqual(resolve_menu_href(None, "data:text/html,hi"), "#")
        self.assertEqual(resolve_menu_href(None, "ftp://example.com/file"), "#")

    def test_protocol_relative_url_not_internal(self):
        """//host 는 내부 경로로 취급하지 않음"""
        self.assertEqual(resolve_menu_href(None, "//evil.com"), "#")
        self.assertEqual(resolve_menu_href(None, "/\\evil.com"), "#")

    def test_control_characters_rejected(self):
        """브라우저가 탭/개행을 제거하면 //host 가 되는 경로 거부"""
        self.assertEqual(resolve_menu_href(None, "/\t/evil.com"), "#")
        self.assertEqual(resolve_menu_href(None, "/\n/evil.com"), "#")
        self.assertEqual(resolve_menu_href(None, "/\r\n/evil.com"), "#")
        self.assertEqual(resolve_menu_href("about", "/\t/evil.com"), "/about")

    def test_malformed_idna_host_rejected(self):
        """잘못된 punycode 호스트는 예외 없이 거부"""
        self.assertEqual(resolve_menu_href(None, "https://xn--/"), "#")
        self.assertEqual(resolve_menu_href(None, "https://xn--a/"), "#")
        self.assertEqual(resolve_menu_href("about", "https://xn--a/"), "/about")

    def test_root_relative_path_collapses_slashes(self):
        self.assertEqual(resolve_menu_href(None, "/"), "/")
        self.assertEqual(resolve_menu_href(None, "/articles//2024///"), "/articles/2024/")
        self.assertEqual(
            resolve_menu_href(None, "/go?next=https://example.com"),
            "/go?next=https://example.com",
        )

    def test_url_takes_precedence_over_slug(self):
        self.assertEqual(resolve_menu_href("about", "/contact"), "/contact")

    def test_rejected_url_falls_back_to_slug(self):
        self.assertEqual(resolve_menu_href("about", "javascript:alert(1)"), "/about")

    def test_nothing_resolvable(self):
        self.assertEqual(resolve_menu_href(None, None), "#")
        self.assertEqual(resolve_menu_href("", "   "), "#")

    def test_idempotent(self):
        first = resolve_menu_href(None, "https://example.com:443/a")
        self.assertEqual(resolve_menu_href(None, first), first)

    def test_annotate_hrefs(self):
        tree = build_menu_tree([
            make_record(1, slug="about"),
            make_record(2, parent_id=1, url="javascript:void(0)"),
        ])

        annotated = annotate_menu_hrefs(tree)

        self.assertEqual(annotated[0]["href"], "/about")
        self.assertEqual(annotated[0]["children"][0]["href"], "#")
        self.assertNotIn("href", tree[0])


class MenuServiceTest(TestCase):
    """메뉴 서비스 테스트"""

    def setUp(self):
        self.home = MenuItem.objects.create(menu="main", title="Home", url="/", order=0)
        self.news = MenuItem.objects.create(menu="main", title="News", slug="news", order=1)
        self.local = MenuItem.objects.create(menu="main", title="Local", slug="news/local", order=0, parent=self.news)
        self.contact = MenuItem.objects.create(menu="footer", title="Contact", url="/contact", order=0)

    def test_get_menu_tree(self):
        tree = get_menu_tree("main")

        self.assertEqual(tree_shape(tree), [(self.home.id, []), (self.news.id, [(self.local.id, [])])])

    def test_create_rejects_parent_from_other_menu(self):
        with self.assertRaises(ValidationException):
            create_menu_item({"menu": "main", "title": "Bad", "parent_id": self.contact.id})

    def test_create_rejects_url_with_page(self):
        with self.assertRaises(ValidationException):
            create_menu_item({"menu": "main", "title": "Bad", "url": "/x", "page_id": "page-1"})

    def test_create_defaults(self):
        item = create_menu_item({"menu": "main", "title": "External", "url": "https://example.com"})

        self.assertEqual(item.order, 0)
        self.assertTrue(item.is_external)
        self.assertTrue(AuditLog.objects.filter(action="MENU_ITEM_CREATE", entity_id=str(item.id)).exists())

    def test_update_rejects_descendant_parent(self):
        """하위 항목을 상위로 지정하면 순환이 되므로 거부"""
        with self.assertRaises(ValidationException):
            update_menu_item(self.news, {"parent_id": self.local.id})
        with self.assertRaises(ValidationException):
            update_menu_item(self.news, {"parent_id": self.news.id})

    def test_update_clears_blank_fields(self):
        item = update_menu_item(self.news, {"slug": "", "icon": "  star "})

        self.assertIsNone(item.slug)
        self.assertEqual(item.icon, "star")

    def test_update_url_marks_external(self):
        item = update_menu_item(self.news, {"url": "https://example.com/news"})

        self.assertTrue(item.is_external)

    def test_update_move_to_root(self):
        item = update_menu_item(self.local, {"parent_id": None})

        self.assertIsNone(item.parent_id)

    def test_delete_removes_subtree(self):
        news_id, local_id = self.news.id, self.local.id

        delete_menu_item(self.news)

        self.assertFalse(MenuItem.objects.filter(pk__in=[news_id, local_id]).exists())
        self.assertTrue(AuditLog.objects.filter(action="MENU_ITEM_DELETE", entity_id=str(news_id)).exists())

    def test_reorder_applies_flattened_tree(self):
        """flatten_menu_tree 결과를 그대로 저장하면 같은 트리가 재구성됨"""
        tree = get_menu_tree("main")
        # Home 을 News 아래로 이동
        home_node = tree.pop(0)
        tree[0]["children"].append(home_node)
        flattened = flatten_menu_tree(tree)

        reorder_menu_items(flattened, menu="main")

        self.home.refresh_from_db()
        self.assertEqual(self.home.parent_id, self.news.id)
        self.assertEqual(self.home.order, 1)
        self.assertEqual(tree_shape(get_menu_tree("main")), tree_shape(tree))
        log = AuditLog.objects.get(action="MENU_ITEM_REORDER")
        self.assertEqual(log.metadata, {"menu": "main", "total": 3})

    def test_reorder_rejects_cycle(self):
        items = [
            {"id": self.news.id, "order": 0, "parent_id": self.local.id},
            {"id": self.local.id, "order": 0, "parent_id": self.news.id},
        ]

        with self.assertRaises(ValidationException):
            reorder_menu_items(items, menu="main")

        self.news.refresh_from_db()
        self.assertIsNone(self.news.parent_id)

    def test_reorder_rejects_mixed_menus(self):
        items = [
            {"id": self.home.id, "order": 0, "parent_id": None},
            {"id": self.contact.id, "order": 1, "parent_id": None},
        ]

        with self.assertRaises(ValidationException):
            reorder_menu_items(items)

    def test_write_notifies_after_commit(self):
        with mock.patch("apps.menus.services.notify_menu_changed") as notify:
            with self.captureOnCommitCallbacks(execute=True):
                create_menu_item({"menu": "footer", "title": "Privacy", "slug": "privacy"})

        notify.assert_called_once_with("footer")

    def test_seed_menus_is_idempotent(self):
        MenuItem.objects.all().delete()

        call_command("seed_menus", stdout=StringIO())
        call_command("seed_menus", stdout=StringIO())

        self.assertEqual(MenuItem.objects.filter(menu="main").count(), 3)
        self.assertEqual(MenuItem.objects.filter(menu="footer").count(), 1)


class MenuApiTest(APITestCase):
    """메뉴 API 테스트"""

    def setUp(self):
        self.admin = User.objects.create_user(login_id="admin1", password="testpass123", name="관리자", role=Role.ADMIN)
        self.editor = User.objects.create_user(login_id="editor1", password="testpass123", name="편집자", role=Role.EDITOR)
        self.about = MenuItem.objects.create(menu="main", title="About", slug="about", order=2)
        self.team = MenuItem.objects.create(menu="main", title="Team", slug="about/team", order=0, parent=self.about)
        self.evil = MenuItem.objects.create(menu="main", title="Evil", url="javascript:alert(1)", order=1)

    def test_list_requires_admin(self):
        response = self.client.get("/api/menus/")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

        self.client.force_authenticate(self.editor)
        response = self.client.get("/api/menus/")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data["error"]["code"], "ERR_002")

    def test_list_menu_items(self):
        self.client.force_authenticate(self.admin)

        response = self.client.get("/api/menus/", {"menu": "main"})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data["data"]), 3)

    def test_create_menu_item(self):
        self.client.force_authenticate(self.admin)

        response = self.client.post("/api/menus/", {
            "menu": "main",
            "title": "Contact",
            "url": "mailto:hello@example.com",
            "parent_id": self.about.id,
        }, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["data"]["parent_id"], self.about.id)
        self.assertTrue(response.data["data"]["is_external"])
        log = AuditLog.objects.get(action="MENU_ITEM_CREATE")
        self.assertEqual(log.user, self.admin)

    def test_create_rejects_bad_url(self):
        self.client.force_authenticate(self.admin)

        response = self.client.post("/api/menus/", {
            "menu": "main",
            "title": "Bad",
            "url": "javascript:alert(1)",
        }, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"]["field"], "url")

    def test_create_rejects_unsafe_urls(self):
        """제어 문자가 섞인 경로, 잘못된 punycode 호스트 거부"""
        self.client.force_authenticate(self.admin)

        for url in ["/\t/evil.com", "/\n/evil.com", "https://xn--/", "https://xn--a/"]:
            response = self.client.post("/api/menus/", {
                "menu": "main",
                "title": "Bad",
                "url": url,
            }, format="json")

            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, url)
            self.assertEqual(response.data["error"]["field"], "url")

    def test_public_tree_survives_malformed_host(self):
        """저장된 URL 이 잘못되어도 공개 트리는 '#' 으로 응답"""
        MenuItem.objects.create(menu="main", title="Broken", url="https://xn--a/", order=3)

        response = self.client.get("/api/menus/main/tree/")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["items"][-1]["href"], "#")

    def test_create_rejects_unknown_field(self):
        self.client.force_authenticate(self.admin)

        response = self.client.post("/api/menus/", {
            "menu": "main",
            "title": "Extra",
            "hacker": True,
        }, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_create_rejects_parent_from_other_menu(self):
        footer = MenuItem.objects.create(menu="footer", title="Contact", url="/contact")
        self.client.force_authenticate(self.admin)

        response = self.client.post("/api/menus/", {
            "menu": "main",
            "title": "Child",
            "parent_id": footer.id,
        }, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"]["field"], "parent_id")

    def test_detail_not_found(self):
        self.client.force_authenticate(self.admin)

        response = self.client.get("/api/menus/99999/")

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["error"]["code"], "ERR_201")

    def test_update_menu_item(self):
        self.client.force_authenticate(self.admin)

        response = self.client.patch(f"/api/menus/{self.team.id}/", {"title": "Our Team", "slug": ""}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.team.refresh_from_db()
        self.assertEqual(self.team.title, "Our Team")
        self.assertIsNone(self.team.slug)

    def test_delete_menu_item(self):
        self.client.force_authenticate(self.admin)

        response = self.client.delete(f"/api/menus/{self.about.id}/")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(MenuItem.objects.filter(pk=self.team.id).exists())

    def test_reorder(self):
        self.client.force_authenticate(self.admin)

        response = self.client.post("/api/menus/reorder/", {
            "menu": "main",
            "items": [
                {"id": self.team.id, "parent_id": None, "order": 0},
                {"id": self.about.id, "parent_id": None, "order": 1},
            ],
        }, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.team.refresh_from_db()
        self.assertIsNone(self.team.parent_id)

    def test_reorder_requires_items(self):
        self.client.force_authenticate(self.admin)

        response = self.client.post("/api/menus/reorder/", {"menu": "main", "items": []}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_bulk_reorder_patch(self):
        self.client.force_authenticate(self.admin)

        response = self.client.patch("/api/menus/", {
            "items": [{"id": self.evil.id, "order": 5, "parent_id": self.about.id}],
        }, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.evil.refresh_from_db()
        self.assertEqual(self.evil.parent_id, self.about.id)

    def test_menu_names(self):
        MenuItem.objects.create(menu="footer", title="Contact", url="/contact")
        self.client.force_authenticate(self.admin)

        response = self.client.get("/api/menus/names/")

        self.assertEqual(response.data["data"], ["footer", "main"])

    def test_public_tree_with_hrefs(self):
        """공개 트리는 인증 없이 조회되고 href 가 정규화됨"""
        response = self.client.get("/api/menus/main/tree/")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        items = response.data["items"]
        self.assertEqual([item["title"] for item in items], ["Evil", "About"])
        self.assertEqual(items[0]["href"], "#")
        self.assertEqual(items[1]["href"], "/about")
        self.assertEqual(items[1]["children"][0]["href"], "/about/team")
        self.assertEqual(items[1]["children"][0]["order"], 0)


class MenuConsumerTest(TransactionTestCase):
    """메뉴 변경 WebSocket 알림 테스트"""

    async def test_menu_changed_event(self):
        communicator = WebsocketCommunicator(URLRouter(websocket_urlpatterns), "/ws/menus/main/")
        connected, _ = await communicator.connect()
        self.assertTrue(connected)

        await sync_to_async(notify_menu_changed)("main")

        message = await communicator.receive_json_from()
        self.assertEqual(message, {"type": "MENU_CHANGED", "menu": "main"})
        await communicator.disconnect()
