import collections

BUCKET_SIZE = 100000  # bp


def get_index_keys_from_range(contig, start, end):
    """
    Divide the genome into buckets of BUCKET_SIZE bp and return the keys of all
    buckets from floor(start/size) to ceil(end/size). This covers one extra
    bucket at the upper end when `end` is not on a bucket boundary.
    Floor division keeps negative coordinates in negative buckets.
    """
    first = start // BUCKET_SIZE
    last = -(-end // BUCKET_SIZE)  # integer ceil
    return [(contig, bucket * BUCKET_SIZE) for bucket in range(first, last + 1)]


class FusionIndex:
    """Fusions bucketed by the coordinates of their breakpoints and genes."""

    def __init__(self, fusions=None):
        self.buckets = collections.defaultdict(set)
        self.fusion_count = 0
        if fusions is not None:
            for fusion in fusions:
                self.add(fusion)

    def add(self, fusion):
        """Register a fusion under every bucket touched by its breakpoints and genes."""
        keys = set()
        keys.update(get_index_keys_from_range(fusion.contig1, fusion.breakpoint1, fusion.breakpoint1))
        keys.update(get_index_keys_from_range(fusion.contig2, fusion.breakpoint2, fusion.breakpoint2))
        keys.update(get_index_keys_from_range(fusion.contig1, fusion.gene1.start, fusion.gene1.end))
        keys.update(get_index_keys_from_range(fusion.contig2, fusion.gene2.start, fusion.gene2.end))
        for key in keys:
            self.buckets[key].add(fusion)
        self.fusion_count += 1

    def near(self, contig, start, end):
        """Keys of the non-empty buckets overlapping contig:start-end."""
        return [key for key in get_index_keys_from_range(contig, start, end) if self.buckets.get(key)]

    def candidates(self, key):
        # snapshot, so the caller may discard() while iterating
        return list(self.buckets.get(key, ()))

    def discard(self, key, fusion):
        bucket = self.buckets.get(key)
        if bucket is not None:
            bucket.discard(fusion)

    def __len__(self):
        return sum(1 for bucket in self.buckets.values() if bucket)

    def __contains__(self, key):
        return bool(self.buckets.get(key))
