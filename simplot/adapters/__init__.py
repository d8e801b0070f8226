from simplot.adapters.normalize import coerce_column, pack_records

__all__ = ["coerce_column", "pack_records"]
