from typing import Callable, Iterable

from .model import Buffer, BufferBuilder, FormattedRegion


def build_from_regions(buffer: Buffer, regions: list[FormattedRegion]) -> Buffer:
    """Replace each region of ``buffer`` with its content.

    Text between regions is copied as buffer slices, so spans attached by
    earlier passes are carried over. Plain-text content gets only the
    region's own tag; buffer content keeps its spans as well.

    Args:
        buffer: Buffer the regions were matched against
        regions: Non-overlapping regions sorted by start offset

    Returns:
        ``buffer`` itself when there are no regions, a new buffer otherwise
    """
    if not regions:
        return buffer

    builder = BufferBuilder()
    pos = 0

    for region in regions:
        if region.start < pos or not region.start < region.end <= len(buffer):
            raise ValueError(
                f"Invalid region [{region.start}, {region.end}) after offset {pos}"
            )

        # Everything before the region
        if region.start > pos:
            builder.append(buffer.slice(pos, region.start))

        builder.append(region.content, tag=region.tag, embed=region.embed)

        pos = region.end

    # The rest
    if pos < len(buffer):
        builder.append(buffer.slice(pos, len(buffer)))

    return builder.build()


def collect_regions(
    buffer: Buffer,
    collect: Callable[[Buffer], Iterable[FormattedRegion]],
) -> Buffer:
    """Run ``collect`` over the buffer as it is now, then rewrite once."""
    return build_from_regions(buffer, list(collect(buffer)))
