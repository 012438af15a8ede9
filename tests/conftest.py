"""Shared fixtures: a tiny genome with a handful of genes and a fusion factory."""
import pytest

from engine.fusion import Fusion, Gene


@pytest.fixture
def contigs():
    return {"chr1": 0, "chr2": 1, "chr17": 2}


@pytest.fixture
def genes(contigs):
    return {
        "GENEA": Gene("GENEA", contigs["chr1"], 900, 1100),
        "GENEB": Gene("GENEB", contigs["chr2"], 5000, 5999),
        "BRCA1": Gene("BRCA1", contigs["chr17"], 43044294, 43125482),
        "GENEC": Gene("GENEC", contigs["chr1"], 250000, 250999),
        "GENED": Gene("GENED", contigs["chr1"], 254000, 254999),
    }


@pytest.fixture
def make_fusion(genes):
    """Fusion between two catalog genes with sensible defaults (well supported, unfiltered)."""
    def _make(gene1="GENEA", gene2="GENEB", **kwargs):
        g1, g2 = genes[gene1], genes[gene2]
        kwargs.setdefault("breakpoint1", g1.start + (g1.end - g1.start) // 2)
        kwargs.setdefault("breakpoint2", g2.start + (g2.end - g2.start) // 2)
        kwargs.setdefault("split_reads1", 5)
        kwargs.setdefault("split_reads2", 5)
        kwargs.setdefault("discordant_mates", 3)
        return Fusion(g1, g2, **kwargs)
    return _make
