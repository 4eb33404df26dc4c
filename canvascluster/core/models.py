"""Value objects exchanged with the cluster engine."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class NodePosition:
    """Layout-relevant projection of one canvas node."""

    id: str
    x: float
    y: float
    type: str
    status: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data = {"id": self.id, "x": self.x, "y": self.y, "type": self.type}
        if self.status is not None:
            data["status"] = self.status
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "NodePosition":
        return cls(
            id=str(data["id"]),
            x=float(data["x"]),
            y=float(data["y"]),
            type=str(data.get("type") or "text"),
            status=data.get("status"),
        )


@dataclass(frozen=True)
class EdgeInfo:
    """Explicit relationship between two canvas nodes (treated as undirected)."""

    source: str
    target: str

    def to_dict(self) -> dict[str, str]:
        return {"source": self.source, "target": self.target}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EdgeInfo":
        return cls(source=str(data["source"]), target=str(data["target"]))


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class Bounds:
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def to_dict(self) -> dict[str, float]:
        return {
            "min_x": self.min_x,
            "min_y": self.min_y,
            "max_x": self.max_x,
            "max_y": self.max_y,
        }


@dataclass
class ClusterSummary:
    """Frequency tables describing a cluster's members."""

    node_count: int
    type_counts: dict[str, int] = field(default_factory=dict)
    status_counts: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "node_count": self.node_count,
            "type_counts": dict(self.type_counts),
            "status_counts": dict(self.status_counts),
        }


@dataclass
class Cluster:
    """A summary bubble covering a group of spatially related nodes."""

    id: str
    node_ids: list[str]
    centroid: Point
    bounds: Bounds
    dominant_type: str
    summary: ClusterSummary

    def __len__(self):
        return len(self.node_ids)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "node_ids": list(self.node_ids),
            "centroid": self.centroid.to_dict(),
            "bounds": self.bounds.to_dict(),
            "dominant_type": self.dominant_type,
            "summary": self.summary.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Cluster":
        summary = data["summary"]
        return cls(
            id=data["id"],
            node_ids=list(data["node_ids"]),
            centroid=Point(**data["centroid"]),
            bounds=Bounds(**data["bounds"]),
            dominant_type=data["dominant_type"],
            summary=ClusterSummary(
                node_count=summary["node_count"],
                type_counts=dict(summary.get("type_counts", {})),
                status_counts=dict(summary.get("status_counts", {})),
            ),
        )
