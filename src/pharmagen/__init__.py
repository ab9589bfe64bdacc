"""PharmaGen: pharmacogenomic risk analysis from VCF variant calls."""

__version__ = "0.1.0"
