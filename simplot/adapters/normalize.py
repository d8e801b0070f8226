from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from decimal import Decimal
from typing import Any

import numpy as np

from simplot.errors import PlotDataError


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]

try:
    import torch
except Exception:  # pragma: no cover - optional dependency
    torch = None  # type: ignore[assignment]


LITTLE_ENDIAN_F64 = np.dtype("<f8")


def pack_records(*columns: Any, labels: Sequence[str] | None = None) -> tuple[bytes, int]:
    """Zip *columns* record by record and pack them as little-endian float64.

    The shortest column truncates the others, like ``zip``. Returns the packed
    bytes and the number of complete records written.
    """
    if not columns:
        raise PlotDataError("at least one column is required")
    names = list(labels) if labels is not None else [f"column {i}" for i in range(len(columns))]
    if len(names) != len(columns):
        raise ValueError("labels must match the number of columns")

    coerced = [coerce_column(value, label=name) for value, name in zip(columns, names)]
    if all(isinstance(col, np.ndarray) for col in coerced):
        records = min(col.size for col in coerced)  # type: ignore[union-attr]
        table = np.column_stack([col[:records] for col in coerced])  # type: ignore[index]
    else:
        table = _zip_unsized(coerced, names)
        records = table.shape[0]
    return np.ascontiguousarray(table, dtype=LITTLE_ENDIAN_F64).tobytes(), int(records)


def coerce_column(value: Any, *, label: str) -> np.ndarray | Iterator[Any]:
    """Return a 1-D float64 array, or an iterator when *value* has no length."""
    if torch is not None and isinstance(value, torch.Tensor):
        tensor = value.detach()
        if tensor.ndim != 1:
            raise PlotDataError(f"{label} must be 1-D")
        if tensor.is_cuda:
            tensor = tensor.cpu()
        return tensor.to(torch.float64).numpy()

    if pd is not None and isinstance(value, pd.Series):
        return _coerce_ndarray(value.to_numpy(), label=label)

    if isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise PlotDataError(f"{label} must be 1-D")
        return _coerce_ndarray(value, label=label)

    if isinstance(value, (str, bytes, bytearray)):
        raise PlotDataError(f"unsupported {label} input type: {type(value)!r}")

    if isinstance(value, Sequence):
        return _coerce_ndarray(np.asarray(value, dtype=object), label=label)

    if isinstance(value, Iterable):
        return iter(value)

    raise PlotDataError(f"unsupported {label} input type: {type(value)!r}")


def coerce_scalar(raw: Any, *, label: str, index: int) -> float:
    if raw is None:
        return float("nan")
    if isinstance(raw, (str, bytes, bytearray)):
        raise PlotDataError(f"{label} contains non-numeric value at index {index}: {raw!r}")
    if isinstance(raw, Decimal):
        return float(raw)
    try:
        return float(raw)
    except (TypeError, ValueError, OverflowError) as exc:
        raise PlotDataError(f"{label} contains non-numeric value at index {index}: {raw!r}") from exc


def _coerce_ndarray(arr: np.ndarray, *, label: str) -> np.ndarray:
    if arr.ndim != 1:
        raise PlotDataError(f"{label} must be 1-D")
    if arr.dtype.kind in {"U", "S"}:
        raise PlotDataError(f"{label} must be numeric, got dtype {arr.dtype}")
    if arr.dtype.kind in {"i", "u", "f", "b"}:
        return arr.astype(np.float64, copy=False)

    out = np.empty(arr.shape[0], dtype=np.float64)
    for i, raw in enumerate(arr.tolist()):
        out[i] = coerce_scalar(raw, label=label, index=i)
    return out


def _zip_unsized(columns: list[np.ndarray | Iterator[Any]], names: list[str]) -> np.ndarray:
    width = len(columns)
    iterators = [iter(col.tolist()) if isinstance(col, np.ndarray) else col for col in columns]

    def values() -> Iterator[float]:
        for index, record in enumerate(zip(*iterators)):
            for raw, name in zip(record, names):
                yield coerce_scalar(raw, label=name, index=index)

    flat = np.fromiter(values(), dtype=np.float64)
    return flat.reshape(-1, width)
