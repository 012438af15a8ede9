import gzip

import pysam

from engine.fusion import Gene

_FASTA_SUFFIXES = ('.fa', '.fasta', '.fna', '.fa.gz', '.fasta.gz', '.fna.gz')


def open_text(path):
    """Open a text file, decompressing it on the fly if it ends with .gz."""
    path = str(path)
    return gzip.open(path, 'rt') if path.endswith('.gz') else open(path, 'r')


def load_contigs(path):
    """
    Contig catalog (name -> id, in header order) from an indexed FASTA or
    from the header of a SAM/BAM/CRAM file.
    """
    path = str(path)
    if path.endswith(_FASTA_SUFFIXES):
        with pysam.FastaFile(path) as fasta:
            names = fasta.references
    else:
        with pysam.AlignmentFile(path, check_sq=False) as sam:
            names = sam.references
    contigs = {name: i for i, name in enumerate(names)}
    print(f"[*] Loaded {len(contigs)} contigs from {path}.", flush=True)
    return contigs


def load_refflat(refflat_path, contigs):
    """
    Gene catalog (name -> Gene) from a refFlat file.
    Transcripts of the same gene on the same contig are merged into one span.
    refFlat is 0-based half-open; genes are stored 0-based inclusive.
    Unknown contigs are added to `contigs` with the next free id.
    """
    genes = {}
    count = 0
    with open_text(refflat_path) as f:
        for line in f:
            if line.startswith('#'): continue
            parts = line.rstrip('\n').split('\t')
            if len(parts) < 6: continue

            gene_name = parts[0]
            chrom = parts[2]
            try:
                start = int(parts[4])
                end = int(parts[5]) - 1
            except ValueError:
                continue
            if start > end: continue

            if chrom not in contigs:
                contigs[chrom] = len(contigs)
            contig = contigs[chrom]

            gene = genes.get(gene_name)
            if gene is None:
                genes[gene_name] = Gene(gene_name, contig, start, end)
            elif gene.contig == contig:
                gene.start = min(gene.start, start)
                gene.end = max(gene.end, end)
            # same name on another contig (e.g. PAR copies): keep the first one
            count += 1

    print(f"[*] Loaded {len(genes)} genes ({count} transcripts) from {refflat_path}.", flush=True)
    return genes
