from .tabular import (
    fasta_to_csv,
    fastq_to_csv,
    csv_to_fasta,
    csv_to_fastq,
)

__all__ = [
    "fasta_to_csv",
    "fastq_to_csv",
    "csv_to_fasta",
    "csv_to_fastq",
]
