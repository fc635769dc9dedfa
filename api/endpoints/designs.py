from fastapi import APIRouter, Depends, Path, status
from typing import Dict, List, Any

from api.models.design_models import (
    CellDimensionsModel,
    CellModel,
    CellTypeUpdate,
    ColorUpdate,
    DesignCreate,
    DesignListItem,
    DesignSessionModel,
    DimensionsUpdate,
    GlassTypeUpdate,
    GridApply,
    HistoryActionResponse,
    MaterialUpdate,
    MergeRequest,
    PresetApply,
    RatioAxis,
    RatioUpdate,
    SplitRequest,
    SummaryModel,
    ToolUpdate,
)
from api.utils.errors import ResourceNotFoundError, handle_exception
from api.utils.sessions import SessionStore, get_session_store

# Set up logging
import logging
logger = logging.getLogger("curtain_wall.api")

router = APIRouter()


def _history_response(session, snapshot) -> Dict[str, Any]:
    return {
        "applied": snapshot is not None,
        "action": snapshot.action if snapshot else None,
        "description": snapshot.description if snapshot else None,
        "design": session.to_dict(),
    }


@router.post("", response_model=DesignSessionModel, status_code=status.HTTP_201_CREATED)
async def create_design(
    design: DesignCreate,
    store: SessionStore = Depends(get_session_store)
):
    """
    Start a design session.

    The grid is created with the requested size, or from a preset when
    one is named.
    """
    try:
        session = store.create()
        if design.preset:
            session.grid.set_dimensions(design.width, design.height)
            try:
                session.apply_preset(design.preset)
            except KeyError:
                store.delete(session.id)
                raise ResourceNotFoundError("preset", design.preset)
            # A preset is the starting point, not an undoable step
            session.history.clear()
        else:
            session.apply_grid(design.columns, design.rows, design.width, design.height)
        return session.to_dict()
    except Exception as e:
        raise handle_exception(e, "design")


@router.get("", response_model=List[DesignListItem])
async def list_designs(
    limit: int = 10,
    offset: int = 0,
    store: SessionStore = Depends(get_session_store)
):
    """List design sessions, most recently used first."""
    logger.info(f"Listing designs: limit={limit}, offset={offset}")
    return [
        {
            "session_id": session.id,
            "updated_at": session.updated_at.isoformat(),
            "columns": session.grid.cols,
            "rows": session.grid.rows,
            "summary": session.summarize().to_dict(),
        }
        for session in store.list(limit, offset)
    ]


@router.get("/{design_id}", response_model=DesignSessionModel)
async def get_design(design_id: str, store: SessionStore = Depends(get_session_store)):
    try:
        return store.get(design_id).to_dict()
    except Exception as e:
        raise handle_exception(e, "design", design_id)


@router.delete("/{design_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_design(design_id: str, store: SessionStore = Depends(get_session_store)):
    try:
        store.delete(design_id)
    except Exception as e:
        raise handle_exception(e, "design", design_id)


# =============================================================================
# Grid lifecycle
# =============================================================================

@router.post("/{design_id}/grid", response_model=DesignSessionModel)
async def apply_grid(
    design_id: str,
    grid: GridApply,
    store: SessionStore = Depends(get_session_store)
):
    """Re-derive the grid. Discards cells, ratios and undo history."""
    try:
        session = store.get(design_id)
        session.apply_grid(grid.columns, grid.rows, grid.width, grid.height)
        return session.to_dict()
    except Exception as e:
        raise handle_exception(e, "design", design_id)


@router.put("/{design_id}/dimensions", response_model=DesignSessionModel)
async def set_dimensions(
    design_id: str,
    dimensions: DimensionsUpdate,
    store: SessionStore = Depends(get_session_store)
):
    try:
        session = store.get(design_id)
        session.set_dimensions(dimensions.width, dimensions.height)
        return session.to_dict()
    except Exception as e:
        raise handle_exception(e, "design", design_id)


@router.post("/{design_id}/preset", response_model=DesignSessionModel)
async def apply_preset(
    design_id: str,
    preset: PresetApply,
    store: SessionStore = Depends(get_session_store)
):
    try:
        session = store.get(design_id)
        try:
            session.apply_preset(preset.name)
        except KeyError:
            raise ResourceNotFoundError("preset", preset.name)
        return session.to_dict()
    except Exception as e:
        raise handle_exception(e, "design", design_id)


# =============================================================================
# Cell interaction
# =============================================================================

@router.put("/{design_id}/tool", response_model=DesignSessionModel)
async def set_tool(
    design_id: str,
    tool: ToolUpdate,
    store: SessionStore = Depends(get_session_store)
):
    try:
        session = store.get(design_id)
        session.set_tool(tool.tool)
        return session.to_dict()
    except Exception as e:
        raise handle_exception(e, "design", design_id)


@router.post("/{design_id}/cells/{row}/{col}/click", response_model=CellModel)
async def click_cell(
    design_id: str,
    row: int,
    col: int,
    store: SessionStore = Depends(get_session_store)
):
    """Paint the cell (window/door tool) or toggle its selection (structure tool)."""
    try:
        session = store.get(design_id)
        return session.click(row, col).to_dict()
    except Exception as e:
        raise handle_exception(e, "design", design_id)


@router.put("/{design_id}/cells/{row}/{col}/type", response_model=CellModel)
async def set_cell_type(
    design_id: str,
    row: int,
    col: int,
    update: CellTypeUpdate,
    store: SessionStore = Depends(get_session_store)
):
    """
    Paint a cell.

    Like a click, this only applies while a painting tool is active;
    otherwise the cell is returned unchanged.
    """
    try:
        session = store.get(design_id)
        session.set_cell_type(row, col, update.type)
        return session.grid.cell(row, col).to_dict()
    except Exception as e:
        raise handle_exception(e, "design", design_id)


@router.post("/{design_id}/merge", response_model=DesignSessionModel)
async def merge_cells(
    design_id: str,
    request: MergeRequest = MergeRequest(),
    store: SessionStore = Depends(get_session_store)
):
    try:
        session = store.get(design_id)
        anchor = session.merge(request.cell_ids)
        logger.info(f"Design {design_id}: merged into {anchor.id}")
        return session.to_dict()
    except Exception as e:
        raise handle_exception(e, "design", design_id)


@router.post("/{design_id}/split", response_model=DesignSessionModel)
async def split_cell(
    design_id: str,
    request: SplitRequest = SplitRequest(),
    store: SessionStore = Depends(get_session_store)
):
    try:
        session = store.get(design_id)
        session.split(request.cell_id)
        return session.to_dict()
    except Exception as e:
        raise handle_exception(e, "design", design_id)


@router.post("/{design_id}/selection/clear", response_model=DesignSessionModel)
async def clear_selection(design_id: str, store: SessionStore = Depends(get_session_store)):
    try:
        session = store.get(design_id)
        session.clear_selection()
        return session.to_dict()
    except Exception as e:
        raise handle_exception(e, "design", design_id)


# =============================================================================
# Ratios
# =============================================================================

@router.put("/{design_id}/ratios/{axis}/{index}", response_model=DesignSessionModel)
async def set_ratio(
    design_id: str,
    update: RatioUpdate,
    axis: RatioAxis = Path(description="Which ratio list to edit"),
    index: int = Path(description="Zero-based column/row index"),
    store: SessionStore = Depends(get_session_store)
):
    try:
        session = store.get(design_id)
        if axis == RatioAxis.COLUMNS:
            session.set_col_ratio(index, update.value)
        else:
            session.set_row_ratio(index, update.value)
        return session.to_dict()
    except Exception as e:
        raise handle_exception(e, "design", design_id)


@router.post("/{design_id}/ratios/reset", response_model=DesignSessionModel)
async def reset_ratios(design_id: str, store: SessionStore = Depends(get_session_store)):
    try:
        session = store.get(design_id)
        session.reset_ratios()
        return session.to_dict()
    except Exception as e:
        raise handle_exception(e, "design", design_id)


# =============================================================================
# Material settings
# =============================================================================

@router.put("/{design_id}/material", response_model=DesignSessionModel)
async def set_material(
    design_id: str,
    update: MaterialUpdate,
    store: SessionStore = Depends(get_session_store)
):
    """Change the frame material. Recorded in the undo history."""
    try:
        session = store.get(design_id)
        session.set_material(update.material)
        return session.to_dict()
    except Exception as e:
        raise handle_exception(e, "design", design_id)


@router.put("/{design_id}/glass-type", response_model=DesignSessionModel)
async def set_glass_type(
    design_id: str,
    update: GlassTypeUpdate,
    store: SessionStore = Depends(get_session_store)
):
    try:
        session = store.get(design_id)
        session.set_glass_type(update.glass_type)
        return session.to_dict()
    except Exception as e:
        raise handle_exception(e, "design", design_id)


@router.put("/{design_id}/color", response_model=DesignSessionModel)
async def set_frame_color(
    design_id: str,
    update: ColorUpdate,
    store: SessionStore = Depends(get_session_store)
):
    try:
        session = store.get(design_id)
        session.set_frame_color(update.color)
        return session.to_dict()
    except Exception as e:
        raise handle_exception(e, "design", design_id)


# =============================================================================
# History
# =============================================================================

@router.post("/{design_id}/undo", response_model=HistoryActionResponse)
async def undo(design_id: str, store: SessionStore = Depends(get_session_store)):
    try:
        session = store.get(design_id)
        return _history_response(session, session.undo())
    except Exception as e:
        raise handle_exception(e, "design", design_id)


@router.post("/{design_id}/redo", response_model=HistoryActionResponse)
async def redo(design_id: str, store: SessionStore = Depends(get_session_store)):
    try:
        session = store.get(design_id)
        return _history_response(session, session.redo())
    except Exception as e:
        raise handle_exception(e, "design", design_id)


@router.post("/{design_id}/undo-merge", response_model=HistoryActionResponse)
async def undo_last_merge(design_id: str, store: SessionStore = Depends(get_session_store)):
    """Roll back to the state before the most recent merge."""
    try:
        session = store.get(design_id)
        return _history_response(session, session.undo_last_merge())
    except Exception as e:
        raise handle_exception(e, "design", design_id)


# =============================================================================
# Read-only views
# =============================================================================

@router.get("/{design_id}/summary", response_model=SummaryModel)
async def get_summary(design_id: str, store: SessionStore = Depends(get_session_store)):
    try:
        return store.get(design_id).summarize().to_dict()
    except Exception as e:
        raise handle_exception(e, "design", design_id)


@router.get("/{design_id}/metrics", response_model=Dict[str, Any])
async def get_metrics(design_id: str, store: SessionStore = Depends(get_session_store)):
    """Design aggregates in the shape curtain-wall pricing consumes."""
    try:
        return store.get(design_id).metrics().to_dict()
    except Exception as e:
        raise handle_exception(e, "design", design_id)


@router.get("/{design_id}/cells/{row}/{col}/dimensions", response_model=CellDimensionsModel)
async def get_cell_dimensions(
    design_id: str,
    row: int,
    col: int,
    store: SessionStore = Depends(get_session_store)
):
    try:
        width, height = store.get(design_id).compute_cell_dimensions(row, col)
        return {"row": row, "col": col, "width": round(width, 2), "height": round(height, 2)}
    except Exception as e:
        raise handle_exception(e, "design", design_id)
