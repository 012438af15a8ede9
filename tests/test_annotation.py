import gzip

import pysam

from engine.blacklist import GeneItem, parse_blacklist_line
from utils.annotation import load_contigs, load_refflat, open_text

REFFLAT = (
    "#geneName\tname\tchrom\tstrand\ttxStart\ttxEnd\tcdsStart\tcdsEnd\texonCount\texonStarts\texonEnds\n"
    "EML4\tNM_019063\tchr2\t+\t42169350\t42332548\t42169500\t42330000\t2\t42169350,42330000,\t42169600,42332548,\n"
    "EML4\tNM_001145076\tchr2\t+\t42169000\t42300000\t42169500\t42299000\t1\t42169000,\t42300000,\n"
    "ALK\tNM_004304\tchr2\t-\t29192773\t29921586\t29193000\t29920000\t1\t29192773,\t29921586,\n"
    "SRY\tNM_003140\tchrY\t-\t2786854\t2787699\t2786900\t2787600\t1\t2786854,\t2787699,\n"
    "broken\tline\n"
)


def test_open_text_plain_and_gzip(tmp_path):
    plain = tmp_path / "rules.tsv"
    plain.write_text("chr1:1\tany\n")
    packed = tmp_path / "rules.tsv.gz"
    with gzip.open(packed, "wt") as f:
        f.write("chr1:1\tany\n")
    for path in (plain, packed):
        with open_text(path) as f:
            assert f.read() == "chr1:1\tany\n"


def test_load_refflat_merges_transcripts(tmp_path):
    path = tmp_path / "refFlat.txt.gz"
    with gzip.open(path, "wt") as f:
        f.write(REFFLAT)
    contigs = {"chr1": 0, "chr2": 1}
    genes = load_refflat(path, contigs)

    assert set(genes) == {"EML4", "ALK", "SRY"}
    eml4 = genes["EML4"]
    assert (eml4.contig, eml4.start, eml4.end) == (1, 42169000, 42332547)
    assert contigs["chrY"] == 2
    assert genes["SRY"].contig == 2


def test_refflat_genes_resolve_blacklist_rules(tmp_path):
    path = tmp_path / "refFlat.txt"
    path.write_text(REFFLAT)
    contigs = {"chr2": 0}
    genes = load_refflat(path, contigs)
    item1, item2 = parse_blacklist_line("ALK\tEML4", contigs, genes)
    assert isinstance(item1, GeneItem) and item1.gene is genes["ALK"]
    assert isinstance(item2, GeneItem) and item2.gene is genes["EML4"]


def test_load_contigs_from_fasta(tmp_path):
    path = tmp_path / "genome.fa"
    path.write_text(">chr1\nACGTACGTAC\n>chr2\nGGGGCCCC\n>chrM\nAC\n")
    pysam.faidx(str(path))
    assert load_contigs(path) == {"chr1": 0, "chr2": 1, "chrM": 2}


def test_load_contigs_from_alignment_header(tmp_path):
    path = tmp_path / "sample.sam"
    header = {
        "HD": {"VN": "1.6", "SO": "coordinate"},
        "SQ": [{"SN": "1", "LN": 1000}, {"SN": "2", "LN": 2000}],
    }
    with pysam.AlignmentFile(str(path), "w", header=header):
        pass
    assert load_contigs(path) == {"1": 0, "2": 1}
