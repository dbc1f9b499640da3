from __future__ import annotations

from typing import List, TypedDict

# Reusable typed mapping for JSON graph files

GraphDict = TypedDict(
    "GraphDict",
    {
        "order": int,
        "edges": List[List[int]],
    },
)
