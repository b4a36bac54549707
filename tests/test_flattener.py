"""Tests for the block flattener."""

import pytest

from notion_bridge.notion.client import NotionClient
from notion_bridge.notion.flattener import BlockFlattener, render_line
from notion_bridge.notion.models import NotionBlock
from tests.fakes import FakeNotion


@pytest.fixture
def fake_notion():
    """Fake workspace with one nested page."""
    fake = FakeNotion()
    page = fake.add_page("Meeting Notes", page_id="page-1")

    fake.add_block(page, "heading_1", "Agenda")
    intro = fake.add_block(page, "paragraph", "Intro")
    point = fake.add_block(intro, "bulleted_list_item", "point a")
    fake.add_block(point, "to_do", "done", checked=True)
    fake.add_block(intro, "numbered_list_item", "step")
    columns = fake.add_block(page, "column_list")
    fake.add_block(columns, "paragraph", "in column")
    fake.add_block(page, "paragraph", "   ")
    fake.add_block(page, "quote", "wise words")
    fake.add_block(page, "callout", "note")
    fake.add_block(page, "to_do", "todo")
    return fake


@pytest.fixture
def flattener(fake_notion):
    return BlockFlattener(NotionClient(sdk=fake_notion, page_size=2))


class TestRenderLine:
    """Tests for per-block line rendering."""

    @pytest.mark.parametrize(
        "block_type,expected",
        [
            ("paragraph", "text"),
            ("heading_1", "# text"),
            ("heading_2", "## text"),
            ("heading_3", "### text"),
            ("bulleted_list_item", "- text"),
            ("numbered_list_item", "1. text"),
            ("quote", "> text"),
            ("callout", "💬 text"),
        ],
    )
    def test_markers(self, block_type, expected):
        assert render_line(NotionBlock("b", block_type, text="text")) == expected

    def test_to_do_checked_state(self):
        assert render_line(NotionBlock("b", "to_do", text="x", checked=True)) == "[x] x"
        assert render_line(NotionBlock("b", "to_do", text="x", checked=False)) == "[ ] x"

    def test_unsupported_type_renders_nothing(self):
        assert render_line(NotionBlock("b", "toggle", text="hidden")) == ""

    def test_strips_surrounding_whitespace(self):
        assert render_line(NotionBlock("b", "paragraph", text="  padded  ")) == "padded"

    def test_empty_heading_keeps_marker(self):
        assert render_line(NotionBlock("b", "heading_2")) == "##"


class TestBlockFlattener:
    """Tests for BlockFlattener."""

    @pytest.mark.asyncio
    async def test_flatten_nested_page(self, flattener):
        """Test depth-first, pre-order output with indentation."""
        text = await flattener.flatten("page-1")

        assert text.split("\n") == [
            "# Agenda",
            "Intro",
            "  - point a",
            "    [x] done",
            "  1. step",
            "  in column",
            "> wise words",
            "💬 note",
            "[ ] todo",
        ]

    @pytest.mark.asyncio
    async def test_flatten_is_deterministic(self, flattener):
        """Test flattening twice without changes gives the same lines."""
        first = await flattener.flatten_lines("page-1")
        second = await flattener.flatten_lines("page-1")
        assert first == second

    @pytest.mark.asyncio
    async def test_flatten_empty_page(self):
        fake = FakeNotion()
        fake.add_page("Empty", page_id="empty")

        assert await BlockFlattener(NotionClient(sdk=fake)).flatten("empty") == ""

    @pytest.mark.asyncio
    async def test_unsupported_parent_children_are_read(self):
        """Test children of unsupported blocks appear one level deeper."""
        fake = FakeNotion()
        page = fake.add_page("Toggles", page_id="page-t")
        toggle = fake.add_block(page, "toggle", "Click me")
        fake.add_block(toggle, "paragraph", "hidden detail")

        text = await BlockFlattener(NotionClient(sdk=fake)).flatten("page-t")

        assert text == "  hidden detail"

    @pytest.mark.asyncio
    async def test_max_depth_stops_descent(self):
        """Test blocks nested deeper than max_depth are skipped."""
        fake = FakeNotion()
        page = fake.add_page("Deep", page_id="deep")
        level0 = fake.add_block(page, "bulleted_list_item", "level 0")
        level1 = fake.add_block(level0, "bulleted_list_item", "level 1")
        fake.add_block(level1, "bulleted_list_item", "level 2")

        text = await BlockFlattener(NotionClient(sdk=fake), max_depth=1).flatten("deep")

        assert text == "- level 0\n  - level 1"
        listed = [call["block_id"] for call in fake.calls_to("blocks.children.list")]
        assert level1 not in listed

    @pytest.mark.asyncio
    async def test_archived_blocks_are_not_read(self, fake_notion, flattener):
        first = fake_notion.visible_children("page-1")[0]
        fake_notion.archived.add(first)

        lines = await flattener.flatten_lines("page-1")

        assert "# Agenda" not in lines
