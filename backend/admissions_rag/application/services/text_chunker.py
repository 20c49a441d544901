"""Text chunker — splits document text into overlapping, boundary-aligned spans.

Consecutive chunks share exactly ``overlap`` characters, so the original
text is ``chunks[0] + chunks[1][overlap:] + chunks[2][overlap:] + ...``.
"""

from admissions_rag.domain.exceptions import ValidationError

# ── Chunking constants ──────────────────────────────────────────────
_DEFAULT_CHUNK_SIZE = 1000
_DEFAULT_CHUNK_OVERLAP = 200

# Preferred cut points, strongest first. The cut falls after the separator.
_SEPARATORS = ("\n\n", "\n", ". ", "? ", "! ", " ")


class TextChunker:
    """Deterministic splitter favouring paragraph, line, sentence and word breaks."""

    def __init__(
        self,
        chunk_size: int = _DEFAULT_CHUNK_SIZE,
        overlap: int = _DEFAULT_CHUNK_OVERLAP,
    ):
        _validate(chunk_size, overlap)
        self._chunk_size = chunk_size
        self._overlap = overlap

    @property
    def chunk_size(self) -> int:
        return self._chunk_size

    @property
    def overlap(self) -> int:
        return self._overlap

    def chunk(
        self,
        text: str,
        chunk_size: int | None = None,
        overlap: int | None = None,
    ) -> list[str]:
        """Split ``text`` into ordered, overlapping spans.

        Args:
            text: Raw document text. Empty text yields an empty list.
            chunk_size: Maximum span length; defaults to the instance value.
            overlap: Characters shared by consecutive spans; defaults to the
                instance value.

        Raises:
            ValidationError: If the parameters are not positive integers
                with ``overlap < chunk_size``.
        """
        size = self._chunk_size if chunk_size is None else chunk_size
        step_back = self._overlap if overlap is None else overlap
        _validate(size, step_back)

        if not text:
            return []

        chunks: list[str] = []
        start = 0
        length = len(text)

        while True:
            window_end = start + size
            if window_end >= length:
                chunks.append(text[start:])
                return chunks

            end = _find_boundary(text, start, window_end, min_end=start + step_back + 1)
            chunks.append(text[start:end])
            start = end - step_back


def _find_boundary(text: str, start: int, window_end: int, *, min_end: int) -> int:
    """Return the cut position for the window ``text[start:window_end]``.

    Picks the last occurrence of the strongest separator whose cut keeps
    the chunk longer than the overlap; falls back to a hard cut.
    """
    for sep in _SEPARATORS:
        pos = text.rfind(sep, start, window_end)
        if pos == -1:
            continue
        end = pos + len(sep)
        if min_end <= end <= window_end:
            return end
    return window_end


def _validate(chunk_size: int, overlap: int) -> None:
    if isinstance(chunk_size, bool) or not isinstance(chunk_size, int) or chunk_size <= 0:
        raise ValidationError("chunk_size", f"must be a positive integer, got {chunk_size!r}")
    if isinstance(overlap, bool) or not isinstance(overlap, int) or overlap <= 0:
        raise ValidationError("overlap", f"must be a positive integer, got {overlap!r}")
    if overlap >= chunk_size:
        raise ValidationError(
            "overlap", f"must be smaller than chunk_size ({overlap} >= {chunk_size})"
        )
