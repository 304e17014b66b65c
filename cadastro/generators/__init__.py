"""Synthetic data generators for demos and load tests."""

from cadastro.generators.record import RecordInputGenerator, generate_tax_id

__all__ = ["RecordInputGenerator", "generate_tax_id"]
