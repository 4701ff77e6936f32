"""Incremental interpreter for streamed model responses.

Hides how a fragment stream is folded into display text and how the studio
decides that a complete code block has arrived:
- Fragments are concatenated in arrival order
- The whole accumulated text is re-scanned on every fragment
- Extraction waits for a third fence marker (conservative gate)
- A one-shot latch limits extraction to once per response
"""

import re
from collections.abc import AsyncIterable, AsyncIterator
from dataclasses import dataclass

from .intent import IntentPredicate, has_code_intent

FENCE_MARKER = "```"

# Opening fence at the start of a line with an optional one-word language tag,
# then a lazily matched body up to the next fence
_CODE_BLOCK_PATTERN = re.compile(r"^```[\w+#.-]*[ \t]*\n(.*?)```", re.DOTALL | re.MULTILINE)

# A single complete pair is not enough; see StreamedCodeBlockInterpreter
MIN_FENCE_MARKERS = 3


def count_fence_markers(text: str) -> int:
    """Number of non-overlapping fence markers in the text."""
    return text.count(FENCE_MARKER)


def extract_code_block(text: str) -> str | None:
    """Body of the first complete fenced region, or None if there is none."""
    match = _CODE_BLOCK_PATTERN.search(text)
    if match is None:
        return None
    return match.group(1)


@dataclass
class StreamAccumulator:
    """Per-response state: accumulated text and the extraction latch."""

    text: str = ""
    extracted: bool = False
    fragments: int = 0


@dataclass(frozen=True)
class InterpretedFragment:
    """What the presentation surface should apply after one step."""

    display_text: str
    code: str | None = None
    first_fragment: bool = False

    @property
    def activate_code_view(self) -> bool:
        return self.code is not None


class StreamedCodeBlockInterpreter:
    """Turns a fragment stream into live display text and a one-shot code extraction.

    Extraction fires when all of the following hold:
    - the accumulated text holds at least MIN_FENCE_MARKERS fence markers,
      so a response with exactly one fenced block never extracts until a
      further marker arrives
    - a complete fenced region with a non-empty body exists
    - the request text passes the code-intent predicate
    - the accumulator has not latched yet

    The interpreter holds no per-response state itself; everything lives in
    the StreamAccumulator passed to each step, so one instance can serve many
    responses.
    """

    def __init__(
        self,
        request_text: str,
        code_intent: IntentPredicate = has_code_intent,
        min_fence_markers: int = MIN_FENCE_MARKERS,
    ) -> None:
        self._request_text = request_text
        self._code_intent = code_intent
        self._min_fence_markers = min_fence_markers

    @property
    def request_text(self) -> str:
        return self._request_text

    def new_accumulator(self) -> StreamAccumulator:
        return StreamAccumulator()

    def feed(self, accumulator: StreamAccumulator, fragment: str) -> InterpretedFragment:
        """Append one fragment and re-evaluate the extraction decision."""
        accumulator.text += fragment
        accumulator.fragments += 1
        return self._evaluate(accumulator, first_fragment=accumulator.fragments == 1)

    def interpret(self, accumulator: StreamAccumulator) -> InterpretedFragment:
        """Re-evaluate the current accumulated text without appending.

        Once the latch is set this never emits code again.
        """
        return self._evaluate(accumulator, first_fragment=False)

    def _evaluate(self, accumulator: StreamAccumulator, first_fragment: bool) -> InterpretedFragment:
        code = None
        if not accumulator.extracted and self._ready(accumulator.text):
            code = extract_code_block(accumulator.text)
            # An empty body is never pushed to the editor
            if code and self._code_intent(self._request_text):
                accumulator.extracted = True
            else:
                code = None

        return InterpretedFragment(
            display_text=accumulator.text,
            code=code,
            first_fragment=first_fragment,
        )

    def _ready(self, text: str) -> bool:
        return count_fence_markers(text) >= self._min_fence_markers

    async def stream(self, fragments: AsyncIterable[str]) -> AsyncIterator[InterpretedFragment]:
        """Fold an async fragment source, yielding one step per fragment.

        A fresh accumulator is created for the response and dropped when the
        source is exhausted or raises; errors propagate to the caller.
        """
        accumulator = self.new_accumulator()
        async for fragment in fragments:
            yield self.feed(accumulator, fragment)
