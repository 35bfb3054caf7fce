"""Tests for chatmd.widgets.code_block."""

import pytest
from textual.app import App, ComposeResult

from chatmd.app import PreviewApp
from chatmd.heights import collapsed_height, expanded_height
from chatmd.state import ContainerState
from chatmd.widgets import CodeBlock, code_block as code_block_module
from chatmd.widgets.code_block import ICON_EXPAND, ICON_RESTORE

LONG_CODE = "\n".join(f"line_{i} = {i}" for i in range(40))
SHORT_CODE = "a = 1\nb = 2"


class BlockApp(App):
    def __init__(self, *blocks: CodeBlock) -> None:
        super().__init__()
        self._blocks = blocks

    def compose(self) -> ComposeResult:
        yield from self._blocks


async def settle(pilot) -> None:
    for _ in range(4):
        await pilot.pause()


def visual_state(block: CodeBlock) -> tuple:
    return (
        block.expanded,
        block.has_class("-expanded"),
        block.has_class("-voverflow"),
        block.scroll_height,
        block.overflow_cue_visible,
        str(block._expand_button.label),
    )


def test_construct_with_code_outside_app():
    block = CodeBlock(code="a = 1", language="python")
    assert block.code == "a = 1"
    assert block.language == "python"
    assert not block.is_mounted


def test_insert_and_highlight_before_mount():
    block = CodeBlock(ContainerState())
    block.insert("def f():\n")
    block.insert("    return 1\n")
    block.highlight("python")

    assert block.code == "def f():\n    return 1\n"
    assert block.language == "python"
    names = {span.tag.name for span in block.text_block.buffer.spans}
    assert "_nohyphens" in names


def test_highlight_again_replaces_previous_tags():
    block = CodeBlock(code=LONG_CODE, language="python")
    spans = block.text_block.buffer.spans

    block.highlight("python")
    assert block.text_block.buffer.spans == spans

    block.highlight("")
    assert [span.tag.name for span in block.text_block.buffer.spans] == ["_nohyphens"]


@pytest.mark.asyncio
async def test_label_shows_language_set_before_mount():
    block = CodeBlock(code=SHORT_CODE, language="python")
    async with BlockApp(block).run_test(size=(80, 40)) as pilot:
        await settle(pilot)
        assert str(block._language_label.content) == "python"

        block.highlight("rust")
        await settle(pilot)
        assert str(block._language_label.content) == "rust"


@pytest.mark.asyncio
async def test_natural_height_equal_to_pref_is_not_overflow():
    # Nine lines plus the bottom padding row.
    code = "\n".join(f"x{i} = {i}" for i in range(9))
    block = CodeBlock(code=code, language="python")
    async with BlockApp(block).run_test(size=(80, 40)) as pilot:
        await settle(pilot)

        assert block.natural_height == collapsed_height.value()
        assert not block.bounds.overflow
        assert not block.has_class("-voverflow")
        assert not block.overflow_cue_visible
        assert block.scroll_height == collapsed_height.value()


@pytest.mark.asyncio
async def test_short_block_has_no_overflow_cue():
    block = CodeBlock(code=SHORT_CODE, language="python")
    async with BlockApp(block).run_test(size=(80, 40)) as pilot:
        await settle(pilot)

        assert block.natural_height > 0
        assert not block.bounds.overflow
        assert not block.has_class("-voverflow")
        assert not block.overflow_cue_visible
        assert block.scroll_height == block.natural_height


@pytest.mark.asyncio
async def test_long_block_collapses_to_pref():
    block = CodeBlock(code=LONG_CODE, language="python")
    async with BlockApp(block).run_test(size=(80, 40)) as pilot:
        await settle(pilot)

        assert block.natural_height > collapsed_height.value()
        assert not block.expanded
        assert block.scroll_height == collapsed_height.value()
        assert block.has_class("-voverflow")
        assert block.overflow_cue_visible
        assert str(block._expand_button.label) == ICON_EXPAND


@pytest.mark.asyncio
async def test_expand_limits_to_expanded_pref():
    block = CodeBlock(code=LONG_CODE, language="python")
    async with BlockApp(block).run_test(size=(80, 40)) as pilot:
        await settle(pilot)

        block.toggle_expanded()
        await settle(pilot)

        assert block.expanded
        assert block.has_class("-expanded")
        assert block.scroll_height == expanded_height.value()
        assert block.scroll_height >= collapsed_height.value()
        assert not block.overflow_cue_visible
        assert str(block._expand_button.label) == ICON_RESTORE


@pytest.mark.asyncio
async def test_toggle_twice_restores_visual_state():
    block = CodeBlock(code=LONG_CODE, language="python")
    async with BlockApp(block).run_test(size=(80, 40)) as pilot:
        await settle(pilot)
        before = visual_state(block)

        block.toggle_expanded()
        await settle(pilot)
        assert visual_state(block) != before

        block.toggle_expanded()
        await settle(pilot)
        assert visual_state(block) == before


@pytest.mark.asyncio
async def test_collapse_scrolls_back_to_top():
    block = CodeBlock(code=LONG_CODE, language="python")
    async with BlockApp(block).run_test(size=(80, 40)) as pilot:
        await settle(pilot)
        block.toggle_expanded()
        await settle(pilot)

        block._scroller.scroll_to(y=5, animate=False)
        await settle(pilot)
        assert block._scroller.scroll_y == 5

        block.toggle_expanded()
        await settle(pilot)
        assert block._scroller.scroll_y == 0


@pytest.mark.asyncio
async def test_expanded_pref_below_collapsed_is_ignored():
    collapsed_height.publish(14)
    expanded_height.publish(6)
    block = CodeBlock(code=LONG_CODE, language="python")
    async with BlockApp(block).run_test(size=(80, 40)) as pilot:
        await settle(pilot)
        assert block.scroll_height == 14

        block.toggle_expanded()
        await settle(pilot)
        assert block.scroll_height == 14


@pytest.mark.asyncio
async def test_pref_change_recomputes_heights():
    block = CodeBlock(code=LONG_CODE, language="python")
    async with BlockApp(block).run_test(size=(80, 40)) as pilot:
        await settle(pilot)

        collapsed_height.publish(5)
        await settle(pilot)
        assert block.scroll_height == 5

        collapsed_height.publish(100)
        await settle(pilot)
        assert block.scroll_height == block.natural_height
        assert not block.overflow_cue_visible


@pytest.mark.asyncio
async def test_click_expands_collapsed_block():
    block = CodeBlock(code=LONG_CODE, language="python")
    async with BlockApp(block).run_test(size=(80, 40)) as pilot:
        await settle(pilot)

        await pilot.click(block.text_block, offset=(2, 2))
        await settle(pilot)
        assert block.expanded

        # Clicking an expanded block does not collapse it.
        await pilot.click(block.text_block, offset=(2, 4))
        await settle(pilot)
        assert block.expanded


@pytest.mark.asyncio
async def test_expand_button_toggles():
    block = CodeBlock(code=LONG_CODE, language="python")
    async with BlockApp(block).run_test(size=(80, 40)) as pilot:
        await settle(pilot)

        await pilot.click(block._expand_button)
        await settle(pilot)
        assert block.expanded

        await pilot.click(block._expand_button)
        await settle(pilot)
        assert not block.expanded


@pytest.mark.asyncio
async def test_copy_puts_code_on_clipboard(monkeypatch):
    monkeypatch.setattr(code_block_module, "COPY_FEEDBACK_SECONDS", 0.1)
    block = CodeBlock(code=LONG_CODE, language="python")
    app = BlockApp(block)
    async with app.run_test(size=(80, 40)) as pilot:
        await settle(pilot)

        await pilot.click(block._copy_button)
        await settle(pilot)

        assert app.clipboard == LONG_CODE
        assert block.copied_visible
        assert not block.expanded

        await pilot.pause(0.4)
        assert not block.copied_visible


@pytest.mark.asyncio
async def test_wrap_toggle_rewraps_long_lines():
    code = "total = " + " + ".join(str(i) for i in range(80))
    block = CodeBlock(code=code, language="python")
    async with BlockApp(block).run_test(size=(80, 40)) as pilot:
        await settle(pilot)
        unwrapped = block.natural_height

        await pilot.click(block._wrap_button)
        await settle(pilot)

        assert block.wrap
        assert block.text_block.wrap
        assert block.text_block.has_class("-wrap")
        assert block._wrap_button.has_class("-on")
        assert block.natural_height > unwrapped

        block.toggle_wrap()
        await settle(pilot)
        assert not block.text_block.wrap
        assert block.natural_height == unwrapped


@pytest.mark.asyncio
async def test_highlight_tags_whole_block():
    state = ContainerState()
    block = CodeBlock(state)
    async with BlockApp(block).run_test(size=(80, 40)) as pilot:
        block.insert("print('hi')\n")
        block.highlight("python")
        await settle(pilot)

        buffer = block.text_block.buffer
        names = {tag.name for tag in buffer.tags_at(0)}
        assert "_nohyphens" in names
        assert any(name.startswith("hl:") for name in names)
        assert "_nohyphens" in state.tag_table()
        assert block.language == "python"
        assert block.code == "print('hi')\n"


@pytest.mark.asyncio
async def test_highlight_without_language_only_tags_nohyphens():
    block = CodeBlock()
    async with BlockApp(block).run_test(size=(80, 40)) as pilot:
        block.insert("plain text")
        block.highlight("")
        await settle(pilot)

        spans = block.text_block.buffer.spans
        assert [span.tag.name for span in spans] == ["_nohyphens"]
        assert (spans[0].start, spans[0].end) == (0, len("plain text"))


@pytest.mark.asyncio
async def test_preview_app_shows_each_block():
    app = PreviewApp([(SHORT_CODE, "python"), ("echo hi", "sh")])
    async with app.run_test(size=(80, 40)) as pilot:
        await settle(pilot)
        blocks = list(app.query(CodeBlock))
        assert [b.language for b in blocks] == ["python", "sh"]
        # Blocks in one view share the tag table.
        assert blocks[0].container_state is blocks[1].container_state
