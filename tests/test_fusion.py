from engine.fusion import Direction, Filter, Strand


def test_eligibility(make_fusion):
    assert make_fusion().is_eligible_for_blacklist()
    assert not make_fusion(filter=Filter.DUPLICATES).is_eligible_for_blacklist()
    assert make_fusion(filter=Filter.DUPLICATES, closest_genomic_breakpoint1=0).is_eligible_for_blacklist()


def test_read_through_needs_adjacent_genes(make_fusion):
    assert make_fusion("GENEC", "GENED", breakpoint1=250999, breakpoint2=254000).is_read_through()
    # too far apart
    assert not make_fusion("GENEA", "GENED", breakpoint1=1000, breakpoint2=254000).is_read_through()
    # different chromosomes
    assert not make_fusion("GENEA", "GENEB").is_read_through()


def test_read_through_orientation(make_fusion):
    kwargs = dict(breakpoint1=250999, breakpoint2=254000)
    assert not make_fusion("GENEC", "GENED", direction1=Direction.UPSTREAM, **kwargs).is_read_through()
    assert not make_fusion("GENEC", "GENED", predicted_strand2=Strand.REVERSE, **kwargs).is_read_through()
    assert make_fusion("GENEC", "GENED", predicted_strand2=Strand.REVERSE,
                       predicted_strands_ambiguous=True, **kwargs).is_read_through()


def test_gene_length(genes):
    assert len(genes["GENEA"]) == 201
