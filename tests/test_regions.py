"""Tests for Region, RegionRegistry and DrawingSession."""

import pytest

from areamap_engine.config import EngineConfig, RegionConfig, RenderConfig
from areamap_engine.geometry.primitives import Rect
from areamap_engine.regions.region import Region
from areamap_engine.regions.registry import RegionRegistry
from areamap_engine.regions.session import DrawingSession
from areamap_engine.regions.units import ILLEGAL_AREA, format_area
from areamap_engine.rendering.cache import CacheState
from areamap_engine.viewport import Viewport
from tests.conftest import geo_square

COLOR = (10, 200, 30, 32)
UNIT = Rect(0.0, 0.0, 1.0, 1.0)


def _triangle_region(name="Area 1"):
    region = Region(name=name, color=COLOR)
    region.push(0.25, 0.25)
    region.push(0.5, 0.25)
    region.push(0.5, 0.5)
    return region


def _finished_region(name):
    region = _triangle_region(name)
    assert region.finish()
    return region


# ========== Region ==========

def test_region_needs_three_vertices_to_rasterize():
    region = Region(name="Area 1", color=COLOR)
    region.push(0.25, 0.25)
    region.push(0.5, 0.25)
    assert region.rasterize(UNIT, 64, 64) is None

    region.push(0.5, 0.5)
    blit = region.rasterize(UNIT, 64, 64)
    assert blit is not None
    assert region.cache.state == CacheState.VALID


def test_region_pending_move_invalidates_only_on_change():
    region = _triangle_region()
    region.set_pending(0.25, 0.5)
    region.rasterize(UNIT, 64, 64)
    assert region.cache.state == CacheState.VALID

    region.set_pending(0.25, 0.5)
    assert region.cache.state == CacheState.VALID

    region.set_pending(0.3125, 0.5)
    assert region.cache.state == CacheState.EMPTY


def test_region_preview_raster_covers_pending_vertex():
    region = _triangle_region()
    region.set_pending(0.125, 0.5)
    blit = region.rasterize(UNIT, 64, 64)
    # Anchored at the pending vertex, left of every committed vertex
    assert (blit.x, blit.y) == (8, 16)
    assert blit.image[14, 4, 3] > 0


def test_region_edits_invalidate_cache():
    region = _triangle_region()
    region.rasterize(UNIT, 64, 64)
    region.push(0.375, 0.625)
    assert region.cache.state == CacheState.EMPTY

    region.rasterize(UNIT, 64, 64)
    region.undo()
    assert region.cache.state == CacheState.EMPTY


def test_hidden_region_does_not_rasterize():
    region = _finished_region("Area 1")
    region.flip_visible()
    assert not region.visible
    assert region.rasterize(UNIT, 64, 64) is None

    region.flip_visible()
    assert region.rasterize(UNIT, 64, 64) is not None


def test_clipped_region_does_not_rasterize():
    region = _finished_region("Area 1")
    assert region.rasterize(Rect(0.75, 0.75, 1.0, 1.0), 64, 64) is None


def test_zero_sized_viewport_does_not_rasterize():
    region = _finished_region("Area 1")
    assert region.rasterize(UNIT, 64, 64) is not None
    assert region.rasterize(UNIT, 0, 0, resize=True) is None
    assert region.cache.state == CacheState.EMPTY


def test_display_area_while_drawing():
    region = _triangle_region()
    region.set_pending(0.25, 0.5)
    assert region.display_area() == format_area(region.speculative_area())


def test_display_area_of_bowtie_preview():
    region = Region(name="Area 1", color=COLOR)
    region.push(0.25, 0.25)
    region.push(0.5, 0.5)
    region.push(0.25, 0.5)
    region.set_pending(0.5, 0.25)
    assert not region.legal()
    assert region.display_area() == ILLEGAL_AREA


def test_from_coordinates_builds_finished_region():
    region = Region.from_coordinates("field", geo_square(100.0), COLOR)
    assert region.finished
    assert region.vertex_count() == 5
    assert region.committed_area() == pytest.approx(10000.0, rel=1e-3)


def test_from_coordinates_rejects_self_intersection():
    sw, se, ne, nw = geo_square(100.0)
    with pytest.raises(ValueError):
        Region.from_coordinates("bowtie", [sw, ne, se, nw], COLOR)


# ========== RegionRegistry ==========

def test_registry_add_get_remove():
    registry = RegionRegistry()
    region = _finished_region("Area 1")
    registry.add(region)

    assert "Area 1" in registry
    assert len(registry) == 1
    assert registry.get("Area 1") is region
    assert registry.remove("Area 1") is region
    assert len(registry) == 0


def test_registry_rejects_unfinished_and_duplicate_regions():
    registry = RegionRegistry()
    with pytest.raises(ValueError):
        registry.add(_triangle_region("draft"))

    registry.add(_finished_region("Area 1"))
    with pytest.raises(ValueError):
        registry.add(_finished_region("Area 1"))


def test_registry_missing_name_raises_key_error():
    registry = RegionRegistry()
    with pytest.raises(KeyError):
        registry.get("nope")
    with pytest.raises(KeyError):
        registry.remove("nope")


def test_registry_rename_keeps_order():
    registry = RegionRegistry()
    for name in ("a", "b", "c"):
        registry.add(_finished_region(name))

    registry.rename("b", "beta")
    assert registry.list_regions() == ["a", "beta", "c"]
    assert registry.get("beta").name == "beta"

    with pytest.raises(ValueError):
        registry.rename("a", "c")


def test_registry_info():
    registry = RegionRegistry()
    region = _finished_region("Area 1")
    registry.add(region)
    assert registry.info() == [("Area 1", COLOR, region.display_area())]


def test_registry_invalidate_all():
    registry = RegionRegistry()
    region = _finished_region("Area 1")
    registry.add(region)
    region.rasterize(UNIT, 64, 64)

    registry.invalidate_all()
    assert region.cache.state == CacheState.EMPTY


# ========== DrawingSession ==========

def _session():
    return DrawingSession(config=EngineConfig(render=RenderConfig(color_seed=3)))


def _draw_square(draft):
    draft.push(0.25, 0.25)
    draft.push(0.5, 0.25)
    draft.push(0.5, 0.5)
    draft.push(0.25, 0.5)


def test_session_start_names_drafts_in_sequence():
    session = _session()
    draft = session.start()
    assert draft.name == "Area 1"
    assert draft.color[3] == session.config.render.fill_alpha

    with pytest.raises(RuntimeError):
        session.start()

    session.cancel()
    assert session.draft is None
    assert session.start().name == "Area 2"


def test_session_finish_moves_draft_into_registry():
    session = _session()
    draft = session.start("lot")
    _draw_square(draft)

    assert session.finish()
    assert session.draft is None
    assert session.registry.get("lot") is draft
    assert draft.finished


def test_session_failed_finish_keeps_draft():
    session = _session()
    draft = session.start()
    draft.push(0.25, 0.25)
    draft.push(0.5, 0.25)

    assert not session.finish()
    assert session.draft is draft
    assert len(session.registry) == 0


def test_session_finish_rejected_while_pending_edge_crosses():
    session = _session()
    draft = session.start()
    _draw_square(draft)
    draft.set_pending(0.375, 0.125)

    assert not session.finish()
    assert session.draft is draft
    assert not draft.finished

    draft.reset_pending()
    assert session.finish()


def test_session_finish_rejects_taken_name():
    session = _session()
    _draw_square(session.start("lot"))
    assert session.finish()

    _draw_square(session.start("lot"))
    assert not session.finish()
    assert session.draft is not None

    session.rename("lot 2")
    assert session.finish()
    assert session.registry.list_regions() == ["lot", "lot 2"]


def test_session_undo_and_finish_without_draft():
    session = _session()
    assert not session.finish()
    session.undo()

    draft = session.start()
    _draw_square(draft)
    session.undo()
    assert draft.vertex_count() == 3


def test_session_from_config_commits_regions():
    config = EngineConfig(regions=[
        RegionConfig(name="field", coordinates=geo_square(100.0), color=(1, 2, 3)),
        RegionConfig(name="hidden", coordinates=geo_square(50.0), visible=False),
    ])
    session = DrawingSession.from_config(config)

    assert session.registry.list_regions() == ["field", "hidden"]
    field = session.registry.get("field")
    assert field.color == (1, 2, 3, config.render.fill_alpha)
    assert field.committed_area() == pytest.approx(10000.0, rel=1e-3)
    assert not session.registry.get("hidden").visible


def test_session_render_skips_hidden_regions():
    config = EngineConfig(regions=[
        RegionConfig(name="field", coordinates=geo_square(100.0)),
        RegionConfig(name="hidden", coordinates=geo_square(50.0), visible=False),
    ])
    session = DrawingSession.from_config(config)
    viewport = Viewport.from_config(config.viewport)
    session.focus("field", viewport)

    rendered = session.render(viewport)
    assert [region.name for region, _ in rendered] == ["field"]
