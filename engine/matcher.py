from engine.blacklist import Keyword, KeywordItem, GeneItem, PositionItem, RangeItem
from engine.fusion import Direction


def overlapping_fraction(start1, end1, start2, end2):
    """Fraction of range1 (inclusive) covered by range2 (inclusive)."""
    length = end1 - start1 + 1
    if length <= 0:
        return 0.0
    intersection = min(end1, end2) - max(start1, start2) + 1
    if intersection <= 0:
        return 0.0
    return min(intersection, length) / length


def _breakpoint(fusion, which_breakpoint):
    """Returns (contig, position, strand, direction, gene) of one side of the fusion."""
    if which_breakpoint == 1:
        return fusion.contig1, fusion.breakpoint1, fusion.predicted_strand1, fusion.direction1, fusion.gene1
    return fusion.contig2, fusion.breakpoint2, fusion.predicted_strand2, fusion.direction2, fusion.gene2


def _matches_keyword(keyword, fusion, which_breakpoint, evalue_cutoff):
    if keyword is Keyword.ANY:
        return True
    if keyword is Keyword.SPLIT_READ_DONOR:
        split_reads = fusion.split_reads1 if which_breakpoint == 1 else fusion.split_reads2
        return fusion.discordant_mates + split_reads == 0
    if keyword is Keyword.SPLIT_READ_ACCEPTOR:
        split_reads = fusion.split_reads2 if which_breakpoint == 1 else fusion.split_reads1
        return fusion.discordant_mates + split_reads == 0
    if keyword is Keyword.SPLIT_READ_ANY:
        return fusion.discordant_mates == 0
    if keyword is Keyword.DISCORDANT_MATES:
        return fusion.split_reads1 + fusion.split_reads2 == 0
    if keyword is Keyword.READ_THROUGH:
        return fusion.is_read_through()
    if keyword is Keyword.LOW_SUPPORT:
        # recurrent speculative fusions recovered by one filter or another
        return fusion.evalue > evalue_cutoff
    if keyword is Keyword.FILTER_SPLICED:
        return fusion.evalue > evalue_cutoff and fusion.spliced1 and fusion.spliced2
    if keyword is Keyword.NOT_BOTH_SPLICED:
        return not fusion.spliced1 or not fusion.spliced2
    return False


def _passes_contig_and_strand(item, fusion, contig, strand):
    if contig != item.contig:
        return False
    # strands that could not be predicted are compatible with anything
    if item.strand is not None and not fusion.predicted_strands_ambiguous:
        return strand == item.strand
    return True


def matches_blacklist_item(item, fusion, which_breakpoint, evalue_cutoff, max_mate_gap):
    """Check if one breakpoint (1 or 2) of a fusion is condemned by a blacklist item."""
    if isinstance(item, KeywordItem):
        return _matches_keyword(item.keyword, fusion, which_breakpoint, evalue_cutoff)

    contig, breakpoint, strand, direction, gene = _breakpoint(fusion, which_breakpoint)

    if isinstance(item, GeneItem):
        return gene is item.gene

    if isinstance(item, PositionItem):
        if not _passes_contig_and_strand(item, fusion, contig, strand):
            return False
        if breakpoint == item.start:
            return True
        # without split reads the breakpoint is only estimated from discordant mates,
        # so accept mates that lie within max_mate_gap and point towards the blacklisted base
        if fusion.split_reads1 + fusion.split_reads2 == 0:
            if direction == Direction.DOWNSTREAM and item.start - max_mate_gap <= breakpoint <= item.start:
                return True
            if direction == Direction.UPSTREAM and item.start <= breakpoint <= item.start + max_mate_gap:
                return True
        return False

    if isinstance(item, RangeItem):
        if not _passes_contig_and_strand(item, fusion, contig, strand):
            return False
        return overlapping_fraction(gene.start, gene.end, item.start, item.end) > 0.5

    return False


def matches_blacklist_line(item1, item2, fusion, evalue_cutoff, max_mate_gap):
    """The two items may bind to either side of the fusion."""
    return (
        matches_blacklist_item(item1, fusion, 1, evalue_cutoff, max_mate_gap)
        and matches_blacklist_item(item2, fusion, 2, evalue_cutoff, max_mate_gap)
    ) or (
        matches_blacklist_item(item1, fusion, 2, evalue_cutoff, max_mate_gap)
        and matches_blacklist_item(item2, fusion, 1, evalue_cutoff, max_mate_gap)
    )
