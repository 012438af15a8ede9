from engine.blacklist import COORDINATE_ITEMS, parse_blacklist_line
from engine.fusion import Filter
from engine.matcher import matches_blacklist_line
from utils.annotation import open_text
from utils.spatial_index import FusionIndex

DEFAULT_EVALUE_CUTOFF = 0.3
DEFAULT_MAX_MATE_GAP = 10


def _index_keys_for_line(index, items, max_mate_gap):
    """Buckets near every coordinate-bearing item, widened by max_mate_gap."""
    keys = []
    for item in items:
        if isinstance(item, COORDINATE_ITEMS):
            keys.extend(index.near(item.contig, item.start - max_mate_gap, item.end + max_mate_gap))
    return keys


def filter_blacklisted_ranges(fusions, blacklist_lines, contigs, genes,
                              evalue_cutoff=DEFAULT_EVALUE_CUTOFF, max_mate_gap=DEFAULT_MAX_MATE_GAP,
                              trace_logger=None, filter_log_file=None):
    """
    Tag fusions matching a blacklist rule with Filter.BLACKLIST.

    `fusions` maps fusion id -> Fusion and is modified in place. Fusions that
    were already filtered and can't be recovered through genomic support are
    ignored. Returns the number of fusions whose filter is still unset.
    """
    index = FusionIndex(fusion for fusion in fusions.values() if fusion.is_eligible_for_blacklist())
    before_count = sum(1 for fusion in fusions.values() if fusion.filter is None)

    for line_number, line in enumerate(blacklist_lines, 1):
        items = parse_blacklist_line(line, contigs, genes)
        if items is None:
            continue
        item1, item2 = items

        for key in _index_keys_for_line(index, items, max_mate_gap):
            for fusion in index.candidates(key):
                if fusion.filter is Filter.BLACKLIST:
                    index.discard(key, fusion)
                    continue
                if matches_blacklist_line(item1, item2, fusion, evalue_cutoff, max_mate_gap):
                    fusion.filter = Filter.BLACKLIST
                    index.discard(key, fusion)  # don't check it again
                    if trace_logger:
                        rule = line.strip().replace('\t', ' ')
                        trace_logger.log_filter_result(fusion.name, "blacklist", False,
                                                       f"line {line_number}: {rule}")

    remaining = sum(1 for fusion in fusions.values() if fusion.filter is None)
    if filter_log_file is not None:
        filter_log_file.write(f"After blacklist: {remaining} fusions (removed {before_count - remaining})\n")
    return remaining


def filter_blacklist_file(fusions, blacklist_path, contigs, genes,
                          evalue_cutoff=DEFAULT_EVALUE_CUTOFF, max_mate_gap=DEFAULT_MAX_MATE_GAP,
                          trace_logger=None, filter_log_file=None):
    """Like filter_blacklisted_ranges(), reading the rules from a (gzipped) file."""
    print(f"[*] Filtering fusions against blacklist: {blacklist_path}", flush=True)
    with open_text(blacklist_path) as blacklist:
        remaining = filter_blacklisted_ranges(fusions, blacklist, contigs, genes, evalue_cutoff,
                                              max_mate_gap, trace_logger, filter_log_file)
    print(f"[*] Blacklist done: {remaining} fusions remaining", flush=True)
    return remaining
