from pathlib import Path
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    debug: bool = False


class ProjectionModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    earth_radius_m: float = 6_378_137.0
    meters_per_unit: float = 2.0  # 1 model unit = 2 m

    @field_validator("earth_radius_m", "meters_per_unit")
    @classmethod
    def _positive(cls, v: float, info: ValidationInfo) -> float:
        if v <= 0:
            raise ValueError(f"{info.field_name} must be > 0")
        return v


class ViewportModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    canvas_width: int = 1400
    canvas_height: int = 900
    padding: float = 20.0
    pick_radius_px: float = 15.0
    min_threshold_px: float = 8.0
    slack: float = 1.5

    @model_validator(mode="after")
    def _check_canvas(self):
        if self.canvas_width <= 2 * self.padding or self.canvas_height <= 2 * self.padding:
            raise ValueError("padding leaves no drawable area on the canvas")
        return self


# ----------------- SPATIAL INDEX ---------------------


class SpatialIndexLinearModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["linear"] = "linear"


class SpatialIndexKDTreeModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["kdtree"] = "kdtree"
    leafsize: int = Field(default=16, ge=1)


SpatialIndexUnion = Annotated[
    SpatialIndexLinearModel | SpatialIndexKDTreeModel,
    Field(discriminator="kind"),
]

# ----------------- TRIANGULATION ---------------------


class TriangulatorDelaunayModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["delaunay"] = "delaunay"
    qhull_options: str | None = None


TriangulatorUnion = Annotated[TriangulatorDelaunayModel, Field(discriminator="kind")]


# ----------------- GENERATION ---------------------


class GenerationModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    count: int = Field(default=50, ge=0)
    width: float = 1000.0
    height: float = 700.0
    margin: float = 20.0

    @model_validator(mode="after")
    def _check_box(self):
        if self.width <= 2 * self.margin or self.height <= 2 * self.margin:
            raise ValueError("margin leaves no room for nodes")
        return self


# ------------------------------------------------------------------


class SessionModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str = "dijkstra-map"
    run_id: str = "local"
    seed: int = 123
    log: LogModel = LogModel()
    projection: ProjectionModel = ProjectionModel()
    viewport: ViewportModel = ViewportModel()
    spatial_index: SpatialIndexUnion = Field(default_factory=SpatialIndexLinearModel)
    triangulator: TriangulatorUnion = Field(default_factory=TriangulatorDelaunayModel)
    generation: GenerationModel = GenerationModel()


def load_config(path: str | Path) -> SessionModel:
    return SessionModel.model_validate_json(Path(path).read_text(encoding="utf-8"))
