# tests/conftest.py
import sys
import os

# Add project root to path so "src.curtain_wall" and "api" resolve
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest

from src.curtain_wall.grid.cell_types import ToolMode
from src.curtain_wall.grid.panel_grid import PanelGrid
from src.curtain_wall.grid.session import DesignSession


@pytest.fixture
def grid():
    """Default 4x3 grid on a 4.0m x 3.0m wall (every cell 1m x 1m)."""
    return PanelGrid(cols=4, rows=3, width=4.0, height=3.0)


@pytest.fixture
def merged_grid(grid):
    """4x3 grid with a 2x2 span anchored at 0-0."""
    grid.toggle_select(0, 0)
    grid.toggle_select(1, 1)
    grid.merge()
    return grid


@pytest.fixture
def window_grid(grid):
    """4x3 grid with windows painted at 0-1 and 0-2 and a door at 2-1."""
    grid.set_tool(ToolMode.WINDOW)
    grid.click(0, 1)
    grid.click(0, 2)
    grid.set_tool(ToolMode.DOOR)
    grid.click(2, 1)
    grid.set_tool(ToolMode.STRUCTURE)
    return grid


@pytest.fixture
def session():
    return DesignSession()


@pytest.fixture
def profile_data():
    """Price sheet using the older key names."""
    return {
        "code": "S300",
        "brand": "Alumil",
        "name": "Sliding 300",
        "frame_price": 100,
        "frame_price_3": 150,
        "sach_price": 80,
        "accessories_2_sach": 500,
        "accessories_3_sach": 700,
        "accessories_4_sach": 900,
        "glass_price_single": 200,
        "glass_price_double": 400,
        "glass_price_triple": 600,
        "glass_price_laminated": 500,
        "arc_price": 50,
        "mosquito_price_fixed": 30,
        "mosquito_price_plisse": 60,
        "net_price_panda": 90,
        "base_profit_rate": 0.2,
    }
