import enum

MAX_READ_THROUGH_DISTANCE = 10000  # bp between breakpoints of adjacent genes


class Strand(enum.Enum):
    FORWARD = "+"
    REVERSE = "-"


class Direction(enum.Enum):
    UPSTREAM = "upstream"
    DOWNSTREAM = "downstream"


class Filter(enum.Enum):
    """Reasons a fusion can be tagged with. Only BLACKLIST is set by this stage."""
    BLACKLIST = "blacklist"
    READ_THROUGH = "read_through"
    LOW_SUPPORT = "low_support"
    DUPLICATES = "duplicates"


class Gene:
    """Annotated gene span (0-based, inclusive). Compared by identity."""
    __slots__ = ('name', 'contig', 'start', 'end')

    def __init__(self, name, contig, start, end):
        self.name = name
        self.contig = contig
        self.start = int(start)
        self.end = int(end)

    def __len__(self):
        return self.end - self.start + 1

    def __repr__(self):
        return f"Gene({self.name}, contig={self.contig}, {self.start}-{self.end})"


class Fusion:
    """A called fusion. Only `filter` is written by the blacklist stage."""

    def __init__(self, gene1, gene2, contig1=None, contig2=None, breakpoint1=0, breakpoint2=0,
                 predicted_strand1=Strand.FORWARD, predicted_strand2=Strand.FORWARD,
                 direction1=Direction.DOWNSTREAM, direction2=Direction.UPSTREAM,
                 split_reads1=0, split_reads2=0, discordant_mates=0, evalue=0.0,
                 spliced1=False, spliced2=False, predicted_strands_ambiguous=False,
                 filter=None, closest_genomic_breakpoint1=-1):
        self.gene1 = gene1
        self.gene2 = gene2
        self.contig1 = gene1.contig if contig1 is None else contig1
        self.contig2 = gene2.contig if contig2 is None else contig2
        self.breakpoint1 = int(breakpoint1)
        self.breakpoint2 = int(breakpoint2)
        self.predicted_strand1 = predicted_strand1
        self.predicted_strand2 = predicted_strand2
        self.direction1 = direction1
        self.direction2 = direction2
        self.split_reads1 = split_reads1
        self.split_reads2 = split_reads2
        self.discordant_mates = discordant_mates
        self.evalue = evalue
        self.spliced1 = spliced1
        self.spliced2 = spliced2
        self.predicted_strands_ambiguous = predicted_strands_ambiguous
        self.filter = filter
        # negative = no genomic breakpoint nearby, so the fusion can't be recovered later
        self.closest_genomic_breakpoint1 = closest_genomic_breakpoint1

    @property
    def name(self):
        return f"{self.gene1.name}-{self.gene2.name}"

    @property
    def recoverable_by_genomic_support(self):
        return self.closest_genomic_breakpoint1 >= 0

    def is_eligible_for_blacklist(self):
        """Unfiltered fusions, or filtered ones the genomic-support filter may still rescue."""
        return self.filter is None or self.recoverable_by_genomic_support

    def is_read_through(self):
        if self.contig1 != self.contig2 or self.gene1 is self.gene2:
            return False
        if self.direction1 != Direction.DOWNSTREAM or self.direction2 != Direction.UPSTREAM:
            return False
        if not self.predicted_strands_ambiguous and self.predicted_strand1 != self.predicted_strand2:
            return False
        return abs(self.breakpoint2 - self.breakpoint1) < MAX_READ_THROUGH_DISTANCE

    def __repr__(self):
        return (f"Fusion({self.name}, {self.contig1}:{self.breakpoint1} / "
                f"{self.contig2}:{self.breakpoint2}, filter={self.filter})")
