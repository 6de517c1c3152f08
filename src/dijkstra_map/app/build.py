# dijkstra_map/app/build.py
from collections.abc import Mapping

from dijkstra_map.app.hooks import NoopHooks
from dijkstra_map.app.session import GraphSession
from dijkstra_map.config.models import SessionModel
from dijkstra_map.io.recorder import Recorder
from dijkstra_map.io.session_logging import SessionLogging
from dijkstra_map.runtime.registries import (
    importer_formats,
    make_importer,
    make_spatial_index,
    make_triangulator,
)
from dijkstra_map.runtime.rng import RNGRegistry


def build(
    cfg: SessionModel | Mapping | None = None,
    *,
    use_logging: bool = True,
    recorder: Recorder | None = None,
) -> GraphSession:
    # 0) Validate config
    if cfg is None:
        model = SessionModel()
    elif isinstance(cfg, SessionModel):
        model = cfg
    else:
        model = SessionModel.model_validate(cfg)

    # 1) RNG for generated graphs
    rng_registry = RNGRegistry(model.seed, session=model.name)

    # 2) Hooks
    hooks = (
        SessionLogging(
            run_id=model.run_id,
            level=model.log.level,
            debug=model.log.debug,
            recorder=recorder,
        )
        if use_logging
        else NoopHooks()
    )

    # 3) Engine pieces
    importers = {fmt: make_importer(fmt, model.projection) for fmt in importer_formats()}
    make_index = make_spatial_index(model.spatial_index)
    triangulator = make_triangulator(model.triangulator)

    return GraphSession(
        model,
        importers=importers,
        make_index=make_index,
        triangulator=triangulator,
        rng=rng_registry,
        hooks=hooks,
    )
