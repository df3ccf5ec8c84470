import re
from urllib.parse import urlsplit

import httpx

# 메뉴 트리 유틸 (DB/HTTP 의존 없음)
# - build_menu_tree : 평면 레코드 -> 트리
# - flatten_menu_tree : 트리 -> 평면 레코드 (재정렬 저장용)
# - resolve_menu_href : slug / url -> 안전한 링크

NODE_FIELDS = ("id", "menu", "title", "slug", "url", "icon", "order", "page_id")

ALLOWED_URL_SCHEMES = {"http", "https", "mailto", "tel", "sms"}

# 허용 문자: 영문, 숫자, 하이픈, 슬래시 (점, %, 유니코드 불가)
SAFE_SLUG_PATTERN = re.compile(r"[A-Za-z0-9\-/]+")

# "/" 단독 또는 "/" 다음이 "/" 나 "\" 가 아닌 경로만 내부 경로로 인정
ROOT_RELATIVE_PATTERN = re.compile(r"^/(?![/\\])")

EMPTY_HREF = "#"

# 브라우저가 무시하거나 제거하는 문자 (제어 문자, 공백)
UNSAFE_URL_CHARS = re.compile(r"[\x00-\x20\x7f]")


def _sort_key(node):
    return node.get("order") or 0


def build_menu_tree(records):
    """
    평면 메뉴 레코드 목록을 트리로 변환

    Args:
        records: id, menu, title, slug, url, icon, order, parent_id, page_id 키를 가진 dict 목록

    Returns:
        루트 노드 목록. 각 노드는 parent_id 대신 children 을 가진다.

    부모를 찾지 못한 레코드(orphan)는 루트로 취급한다.
    정렬 후 order 는 형제 사이의 0부터 시작하는 인덱스로 다시 매겨진다.
    """
    sorted_records = sorted(records, key=_sort_key)

    node_map = {}
    for record in sorted_records:
        node = {field: record.get(field) for field in NODE_FIELDS}
        node["children"] = []
        node_map[record["id"]] = node

    # 부모-자식 관계 연결
    tree = []
    for record in sorted_records:
        node = node_map[record["id"]]
        parent_id = record.get("parent_id")

        if parent_id is not None and parent_id in node_map:
            node_map[parent_id]["children"].append(node)
        else:
            tree.append(node)

    _sort_recursive(tree)
    return tree


def _sort_recursive(nodes):
    nodes.sort(key=_sort_key)
    for index, node in enumerate(nodes):
        node["order"] = index
        _sort_recursive(node["children"])


def flatten_menu_tree(nodes, depth=0, parent_id=None):
    """
    트리를 전위 순회(부모 -> 자식) 순서의 평면 목록으로 변환
    결과를 build_menu_tree 에 다시 넣으면 같은 트리가 만들어진다.
    """
    flattened = []

    for index, node in enumerate(sorted(nodes, key=_sort_key)):
        flattened.append({
            "id": node["id"],
            "menu": node.get("menu"),
            "title": node.get("title"),
            "slug": node.get("slug"),
            "url": node.get("url"),
            "icon": node.get("icon"),
            "page_id": node.get("page_id"),
            "parent_id": parent_id,
            "order": index,
            "depth": depth,
        })
        flattened.extend(
            flatten_menu_tree(node.get("children") or [], depth + 1, node["id"])
        )

    return flattened


def _resolve_url(url):
    # "/\t/host" 는 브라우저에서 "//host" 가 됨
    if UNSAFE_URL_CHARS.search(url):
        return None

    if ROOT_RELATIVE_PATTERN.match(url):
        # 쿼리/프래그먼트는 그대로 두고 경로 부분의 중복 슬래시만 정리
        split_at = len(url)
        for marker in ("?", "#"):
            position = url.find(marker)
            if position != -1:
                split_at = min(split_at, position)
        return re.sub(r"/{2,}", "/", url[:split_at]) + url[split_at:]

    try:
        scheme = urlsplit(url).scheme.lower()
    except ValueError:
        return None

    if scheme not in ALLOWED_URL_SCHEMES:
        return None

    if scheme in ("http", "https"):
        try:
            parsed = httpx.URL(url)
            # 잘못된 punycode 호스트(xn--)는 IDNA 디코딩에서 UnicodeError
            if not parsed.raw_host or not parsed.host:
                return None
            return str(parsed)
        except (httpx.InvalidURL, UnicodeError):
            return None

    return url


def resolve_menu_href(slug=None, url=None):
    """
    메뉴 항목의 이동 대상을 안전한 href 로 변환

    url 이 우선이며, url 이 없거나 거부되면 slug 를 검사한다.
    둘 다 사용할 수 없으면 "#" (이동 대상 없음) 을 반환한다.
    """
    if url and url.strip():
        resolved = _resolve_url(url.strip())
        if resolved:
            return resolved

    if slug:
        normalized = slug.strip().lstrip("/")
        if normalized and SAFE_SLUG_PATTERN.fullmatch(normalized):
            return f"/{normalized}"

    return EMPTY_HREF


def annotate_menu_hrefs(nodes):
    """트리 복사본의 각 노드에 href 추가 (공개 메뉴 응답용)"""
    annotated = []
    for node in nodes:
        item = {key: value for key, value in node.items() if key != "children"}
        item["href"] = resolve_menu_href(node.get("slug"), node.get("url"))
        item["children"] = annotate_menu_hrefs(node.get("children") or [])
        annotated.append(item)
    return annotated
