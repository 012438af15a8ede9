"""
Blacklist rule language.

Each non-comment line of a blacklist holds two whitespace-separated tokens.
A token is a gene name, a position (`chr:pos`), a range (`chr:start-end`),
optionally prefixed with `+`/`-` to constrain the strand, or (second token
only) one of the keywords below. Coordinates in the file are 1-based and are
converted to 0-based here.
"""
import enum

from engine.fusion import Strand


class Keyword(enum.Enum):
    ANY = "any"
    SPLIT_READ_DONOR = "split_read_donor"
    SPLIT_READ_ACCEPTOR = "split_read_acceptor"
    SPLIT_READ_ANY = "split_read_any"
    DISCORDANT_MATES = "discordant_mates"
    READ_THROUGH = "read_through"
    LOW_SUPPORT = "low_support"
    FILTER_SPLICED = "filter_spliced"
    NOT_BOTH_SPLICED = "not_both_spliced"


_KEYWORDS = {k.value: k for k in Keyword}


class KeywordItem:
    """Evidence pattern without coordinates."""
    __slots__ = ('keyword',)

    def __init__(self, keyword):
        self.keyword = keyword

    def __repr__(self):
        return f"KeywordItem({self.keyword.value})"


class GeneItem:
    __slots__ = ('gene',)

    def __init__(self, gene):
        self.gene = gene

    @property
    def contig(self):
        return self.gene.contig

    @property
    def start(self):
        return self.gene.start

    @property
    def end(self):
        return self.gene.end

    def __repr__(self):
        return f"GeneItem({self.gene.name})"


class PositionItem:
    """Single blacklisted base; end is always start."""
    __slots__ = ('contig', 'start', 'strand')

    def __init__(self, contig, start, strand=None):
        self.contig = contig
        self.start = start
        self.strand = strand

    @property
    def end(self):
        return self.start

    def __repr__(self):
        return f"PositionItem({_strand_prefix(self.strand)}{self.contig}:{self.start})"


class RangeItem:
    __slots__ = ('contig', 'start', 'end', 'strand')

    def __init__(self, contig, start, end, strand=None):
        if start >= end:
            raise ValueError(f"range must span more than one base: {start}-{end}")
        self.contig = contig
        self.start = start
        self.end = end
        self.strand = strand

    def __repr__(self):
        return f"RangeItem({_strand_prefix(self.strand)}{self.contig}:{self.start}-{self.end})"


COORDINATE_ITEMS = (GeneItem, PositionItem, RangeItem)


def _strand_prefix(strand):
    return strand.value if strand is not None else ""


def _warn_malformed(text):
    print(f"[!] WARNING: unknown gene or malformed range: {text}", flush=True)


def parse_range(text, contigs):
    """
    Parse `[+-]contig:pos` or `[+-]contig:start-end`.
    Returns (contig, start, end, strand) in 0-based inclusive coordinates,
    or None (with a warning) if the contig is unknown or the numbers are bad.
    """
    strand = None
    body = text
    if body.startswith('+'):
        strand, body = Strand.FORWARD, body[1:]
    elif body.startswith('-'):
        strand, body = Strand.REVERSE, body[1:]

    contig_name, sep, coordinates = body.partition(':')
    if not contig_name or not sep or contig_name not in contigs:
        _warn_malformed(text)
        return None

    start_text, dash, end_text = coordinates.partition('-')
    try:
        start = int(start_text)
        end = int(end_text) if dash else start
    except ValueError:
        _warn_malformed(text)
        return None

    # 1-based -> 0-based
    return contigs[contig_name], start - 1, end - 1, strand


def parse_blacklist_item(text, contigs, genes, allow_keyword):
    """Resolve one token to a blacklist item, or None if it can't be resolved."""
    if allow_keyword and text in _KEYWORDS:
        return KeywordItem(_KEYWORDS[text])

    gene = genes.get(text)
    if gene is not None:
        return GeneItem(gene)

    parsed = parse_range(text, contigs)
    if parsed is None:
        return None
    contig, start, end, strand = parsed
    if start == end:
        return PositionItem(contig, start, strand)
    if start > end:
        _warn_malformed(text)
        return None
    return RangeItem(contig, start, end, strand)


def parse_blacklist_line(line, contigs, genes):
    """
    Compile one blacklist line into (item1, item2).
    Comments and blank lines give None silently; anything unresolvable gives
    None after a warning, so the whole line is skipped.
    """
    if not line.strip() or line.startswith('#'):
        return None

    tokens = line.split()
    if len(tokens) < 2:
        print(f"[!] WARNING: blacklist line needs two entries: {line.rstrip()}", flush=True)
        return None

    item1 = parse_blacklist_item(tokens[0], contigs, genes, allow_keyword=False)
    if item1 is None:
        return None
    item2 = parse_blacklist_item(tokens[1], contigs, genes, allow_keyword=True)
    if item2 is None:
        return None
    return item1, item2
