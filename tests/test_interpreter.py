"""Unit tests for the streamed code block interpreter."""
import string

import pytest
from hypothesis import given
from hypothesis import strategies as st

from gamegen.studio import (
    StreamAccumulator,
    StreamedCodeBlockInterpreter,
    count_fence_markers,
    extract_code_block,
)
from gamegen.studio.intent import has_code_intent

# Text without any backtick, so fence markers only appear where a test puts them
plain_text = st.text(alphabet=string.ascii_letters + string.digits + " \n.,:;(){}=+-_'\"#")
code_body = plain_text.filter(lambda s: s != "")


def run(interpreter: StreamedCodeBlockInterpreter, fragments: list[str]):
    acc = StreamAccumulator()
    steps = [interpreter.feed(acc, fragment) for fragment in fragments]
    return acc, steps


class TestHelpers:
    """Tests for fence counting and block extraction."""

    def test_count_fence_markers(self):
        assert count_fence_markers("no fences") == 0
        assert count_fence_markers("```py\nx\n```") == 2
        assert count_fence_markers("``````") == 2

    def test_extract_with_language_tag(self):
        assert extract_code_block("intro\n```ts\nconst x = 1;\n```\nmore") == "const x = 1;\n"

    def test_extract_without_language_tag(self):
        assert extract_code_block("```\nprint(1)\n```") == "print(1)\n"

    def test_extract_first_block_only(self):
        text = "```js\nfirst\n```\n```js\nsecond\n```"
        assert extract_code_block(text) == "first\n"

    def test_extract_incomplete_block(self):
        assert extract_code_block("```ts\nconst x = 1;\n") is None

    def test_inline_marker_is_not_an_opener(self):
        text = "Wrap it in ``` marks. Here:\n```ts\nconst x = 1;\n```\n"
        assert extract_code_block(text) == "const x = 1;\n"

    def test_opener_tag_is_one_word(self):
        assert extract_code_block("``` not a tag\nx\n```") is None
        assert extract_code_block("```c++ \nx\n```") == "x\n"


class TestScenario:
    """The worked example: a fenced block followed by an opening fence."""

    def test_extraction_fires_on_third_fragment(self):
        interpreter = StreamedCodeBlockInterpreter("write me some code")
        acc, steps = run(interpreter, [
            "Sure, here:\n```ts\n",
            "const x = 1;\n",
            "```\nAnd one more example:\n```",
        ])

        assert [s.code for s in steps] == [None, None, "const x = 1;\n"]
        assert steps[2].activate_code_view
        assert acc.extracted
        assert steps[2].display_text == (
            "Sure, here:\n```ts\nconst x = 1;\n```\nAnd one more example:\n```"
        )

    def test_first_fragment_flag(self):
        interpreter = StreamedCodeBlockInterpreter("hello")
        _, steps = run(interpreter, ["a", "b", "c"])
        assert [s.first_fragment for s in steps] == [True, False, False]

    def test_display_text_grows_monotonically(self):
        interpreter = StreamedCodeBlockInterpreter("script please")
        _, steps = run(interpreter, ["He", "llo ", "```\nx\n```", " done"])
        texts = [s.display_text for s in steps]
        for earlier, later in zip(texts, texts[1:]):
            assert later.startswith(earlier)


class TestExtractionGate:
    """Tests for the marker count, intent and latch conditions."""

    def test_single_complete_pair_does_not_extract(self):
        interpreter = StreamedCodeBlockInterpreter("write code")
        acc, steps = run(interpreter, ["```ts\n", "let a = 1;\n", "```", "\nThat's it."])
        assert all(s.code is None for s in steps)
        assert not acc.extracted

    def test_empty_body_never_extracts(self):
        interpreter = StreamedCodeBlockInterpreter("write code")
        acc, steps = run(interpreter, ["```\n```", "text ```"])
        assert all(s.code is None for s in steps)
        assert not acc.extracted

    def test_intent_is_case_insensitive(self):
        interpreter = StreamedCodeBlockInterpreter("Give me a SCRIPT")
        _, steps = run(interpreter, ["```\nrun()\n``` ```"])
        assert steps[0].code == "run()\n"

    def test_custom_intent_predicate(self):
        interpreter = StreamedCodeBlockInterpreter("anything", code_intent=lambda _: True)
        _, steps = run(interpreter, ["```\nrun()\n``` ```"])
        assert steps[0].code == "run()\n"

    def test_interpret_after_latch_is_idempotent(self):
        interpreter = StreamedCodeBlockInterpreter("code")
        acc, steps = run(interpreter, ["```\nx = 1\n```\n```"])
        assert steps[0].code == "x = 1\n"

        again = interpreter.interpret(acc)
        assert again.code is None
        assert not again.activate_code_view
        assert again.display_text == acc.text

    def test_latch_blocks_later_blocks(self):
        interpreter = StreamedCodeBlockInterpreter("code")
        _, steps = run(interpreter, ["```\none\n```\n```", "\ntwo\n```", "\n```\nthree\n```"])
        assert [s.code for s in steps] == ["one\n", None, None]

    def test_inline_marker_before_real_block(self):
        interpreter = StreamedCodeBlockInterpreter("write code")
        acc, steps = run(interpreter, [
            "Wrap it in ``` marks. Here:\n```ts\nconst x = 1;\n```\n",
            "Another:\n```js\nlet y = 2;\n```\n",
        ])
        assert [s.code for s in steps] == ["const x = 1;\n", None]
        assert acc.extracted

    def test_accumulators_are_independent(self):
        interpreter = StreamedCodeBlockInterpreter("code")
        first, _ = run(interpreter, ["```\nx\n``` ```"])
        second, steps = run(interpreter, ["```\ny\n``` ```"])
        assert first.extracted and second.extracted
        assert steps[0].code == "y\n"


class TestInterpreterProperties:
    """Property tests for the extraction rules."""

    @given(st.lists(plain_text, max_size=10), plain_text)
    def test_no_markers_never_extract(self, fragments: list[str], request: str):
        """Property: without any fence marker there is never an extraction."""
        interpreter = StreamedCodeBlockInterpreter(request, code_intent=lambda _: True)
        acc, steps = run(interpreter, fragments)
        assert not any(s.activate_code_view for s in steps)
        assert not acc.extracted

    @given(plain_text, code_body, plain_text)
    def test_two_markers_never_extract(self, before: str, body: str, after: str):
        """Property: exactly one complete pair never extracts."""
        interpreter = StreamedCodeBlockInterpreter("code")
        text = f"{before}\n```\n{body}```{after}"
        _, steps = run(interpreter, list(text))
        assert all(s.code is None for s in steps)

    @given(plain_text, code_body, plain_text, st.integers(min_value=1, max_value=7))
    def test_three_markers_extract_exactly_once(self, before: str, body: str, between: str, size: int):
        """Property: a pair plus a third marker extracts the body once, whatever the chunking."""
        interpreter = StreamedCodeBlockInterpreter("code")
        text = f"{before}\n```\n{body}```{between}```"
        fragments = [text[i:i + size] for i in range(0, len(text), size)]
        acc, steps = run(interpreter, fragments)

        extracted = [s.code for s in steps if s.code is not None]
        assert extracted == [body]
        assert acc.extracted
        assert steps[-1].display_text == text

    @given(st.lists(st.text(), max_size=10))
    def test_no_intent_never_extracts(self, fragments: list[str]):
        """Property: without 'code' or 'script' in the request nothing is extracted."""
        request = "draw a dragon"
        assert not has_code_intent(request)
        interpreter = StreamedCodeBlockInterpreter(request)
        _, steps = run(interpreter, ["```\nbody\n```\n```", *fragments])
        assert all(s.code is None for s in steps)


class TestStream:
    """Tests for folding an async fragment source."""

    @pytest.mark.asyncio
    async def test_stream_yields_one_step_per_fragment(self):
        async def source():
            for fragment in ["Sure:\n```ts\n", "a();\n", "```\n```"]:
                yield fragment

        interpreter = StreamedCodeBlockInterpreter("code")
        steps = [step async for step in interpreter.stream(source())]

        assert len(steps) == 3
        assert steps[-1].code == "a();\n"

    @pytest.mark.asyncio
    async def test_stream_propagates_source_errors(self):
        async def source():
            yield "partial"
            raise ConnectionError("dropped")

        interpreter = StreamedCodeBlockInterpreter("code")
        seen = []
        with pytest.raises(ConnectionError):
            async for step in interpreter.stream(source()):
                seen.append(step.display_text)
        assert seen == ["partial"]
