from __future__ import annotations
from typing import List, Optional
import os

from sokoban_core.cell import Element, Tile, get_element, get_tile, pack
from sokoban_core.errors import TemplateCatalogError
from sokoban_core.maze import Template
from sokoban_core.parser import parse_maze_str

TOK_TEMPLATE_VOID = "_"
COMMENT = ";"

DEFAULT_CATALOG = os.path.join(os.path.dirname(__file__), "templates", "catalog.txt")


def _split_on_blank_lines(text: str) -> List[str]:
    blocks: List[str] = []
    cur: List[str] = []
    for line in text.splitlines():
        if line.startswith(COMMENT):
            continue
        if line.strip() == "":
            if cur:
                blocks.append("\n".join(cur))
                cur = []
        else:
            cur.append(line.rstrip())
    if cur:
        blocks.append("\n".join(cur))
    return blocks


def _validate(template: Template, index: int, size: int) -> None:
    if len(template) != size or any(len(row) != size for row in template):
        raise TemplateCatalogError(f"template #{index} is not {size}x{size}")
    for row in template:
        for cell in row:
            if get_element(cell) != Element.NONE or get_tile(cell) == Tile.GOAL:
                raise TemplateCatalogError(f"template #{index} may only hold void, wall and floor")


def parse_templates(text: str) -> List[Template]:
    """Parses blank-line separated template blocks ('#' wall, '-' floor, '_' void)."""
    blocks = _split_on_blank_lines(text)
    if not blocks:
        raise TemplateCatalogError("no templates found")
    templates: List[Template] = []
    size = -1
    for i, block in enumerate(blocks):
        try:
            template = parse_maze_str(block, void=TOK_TEMPLATE_VOID)
        except ValueError as e:
            raise TemplateCatalogError(f"template #{i}: {e}") from e
        if size == -1:
            size = len(template)
            if size < 3:
                raise TemplateCatalogError("templates need a socket ring around a non-empty interior")
        _validate(template, i, size)
        templates.append(template)
    return templates


def load_templates(path: Optional[str] = None) -> List[Template]:
    path = path or DEFAULT_CATALOG
    if not os.path.isfile(path):
        raise TemplateCatalogError(f"template catalog not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        return parse_templates(f.read())


def void_template(size: int) -> Template:
    """All-void boundary template: imposes nothing, accepts no walkable socket."""
    return [[pack(Tile.VOID)] * size for _ in range(size)]
