from __future__ import annotations

from typing import Any, Dict, Iterator, List

from pydantic import BaseModel, Field


class Prediction(BaseModel):
    """Final structured answer of a run plus metadata about how it was reached."""

    outputs: Dict[str, Any] = Field(default_factory=dict)
    metadata: Dict[str, Any] = Field(default_factory=dict)

    def __getitem__(self, key: str) -> Any:
        return self.outputs[key]

    def __contains__(self, key: object) -> bool:
        return key in self.outputs

    def get(self, key: str, default: Any = None) -> Any:
        return self.outputs.get(key, default)

    def keys(self) -> List[str]:
        return list(self.outputs.keys())

    def items(self) -> Iterator[tuple[str, Any]]:
        return iter(self.outputs.items())

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.outputs)
