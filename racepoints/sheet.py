"""Render a CSV file as a spreadsheet-style HTML page.

The page is a single static document: a CSS grid with column letters across
the top, row numbers down the left (both sticky while scrolling) and a search
box that hides cells not containing the search text.
"""

import csv
import logging
import re
from pathlib import Path
from typing import List, Optional

from jinja2 import Environment

from .schemas import SheetOptions
from .utils import save_text

logger = logging.getLogger('racepoints.sheet')

NUMBER_PATTERN = re.compile(r'^-?\d+(\.\d+)?$')

SHEET_TEMPLATE = """<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width,initial-scale=1" />
  <title>{{ title }}</title>
  <style>
    :root{
      --bg: #0b1020;
      --panel: rgba(255,255,255,0.06);
      --text: rgba(255,255,255,0.92);
      --muted: rgba(255,255,255,0.65);
      --border: rgba(255,255,255,0.14);
      --border2: rgba(255,255,255,0.10);
      --accent: #7dd3fc;
      --cellW: {{ cell_width }}px;
      --cellH: {{ cell_height }}px;
      --rowHdrW: 56px;
      --colHdrH: 34px;
    }
    *{ box-sizing: border-box; }
    body{
      margin:0;
      font-family: ui-sans-serif, system-ui, -apple-system, Segoe UI, Roboto, Helvetica, Arial;
      background:
        radial-gradient(1200px 600px at 20% 0%, rgba(125,211,252,0.12), transparent 40%),
        radial-gradient(900px 500px at 80% 20%, rgba(167,139,250,0.12), transparent 45%),
        var(--bg);
      color: var(--text);
    }
    .wrap{ max-width: 1400px; margin: 24px auto; padding: 0 16px 40px; }
    header{
      display:flex; flex-wrap:wrap; gap:12px;
      align-items: baseline; justify-content: space-between;
      margin-bottom: 12px;
    }
    h1{ margin:0; font-size: 18px; letter-spacing: 0.2px; }
    .meta{ color: var(--muted); font-size: 12px; }
    .card{
      border: 1px solid var(--border);
      border-radius: 14px;
      background: rgba(255,255,255,0.04);
      overflow: hidden;
      box-shadow: 0 10px 35px rgba(0,0,0,0.35);
    }
    .sheet-wrap{ overflow: auto; max-height: 78vh; }
    .sheet{
      display: grid;
      grid-template-columns: var(--rowHdrW) repeat({{ total_cols }}, var(--cellW));
      grid-template-rows: var(--colHdrH) repeat({{ total_rows }}, var(--cellH));
      width: max-content;
      min-width: 100%;
      background: rgba(0,0,0,0.10);
    }
    .corner, .colhdr, .rowhdr{
      display:flex; align-items:center; justify-content:center;
      font-size: 12px;
      color: var(--muted);
      border-right: 1px solid var(--border);
      border-bottom: 1px solid var(--border);
      background: rgba(11,16,32,0.92);
      backdrop-filter: blur(8px);
      user-select:none;
    }
    .cell{
      border-right: 1px solid var(--border2);
      border-bottom: 1px solid var(--border2);
      padding: 6px 8px;
      display:flex;
      align-items:center;
      overflow:hidden;
      background: rgba(255,255,255,0.02);
    }
    .cell span{
      display:block;
      width:100%;
      overflow:hidden;
      text-overflow: ellipsis;
      white-space: pre;
    }
    .cell.num{ justify-content:flex-end; font-variant-numeric: tabular-nums; }
    .cell.empty{ background: rgba(255,255,255,0.01); }
    .cell.sticky{ background: rgba(11,16,32,0.92); }
    .sticky.top{ position: sticky; top: 0; z-index: 5; }
    .sticky.left{ position: sticky; left: 0; z-index: 4; }
    .sticky.top.left{ z-index: 6; }
    .cell:hover{
      outline: 2px solid rgba(125,211,252,0.35);
      outline-offset: -2px;
      background: rgba(125,211,252,0.06);
    }
    .toolbar{
      display:flex; gap:10px; flex-wrap:wrap;
      padding: 10px 12px;
      border-top: 1px solid var(--border);
      background: rgba(0,0,0,0.14);
      color: var(--muted);
      font-size: 12px;
      align-items:center;
      justify-content: space-between;
    }
    .toolbar input{
      background: var(--panel);
      border: 1px solid var(--border);
      color: var(--text);
      padding: 8px 10px;
      border-radius: 10px;
      outline:none;
      min-width: 260px;
    }
    .kbd{
      border: 1px solid var(--border);
      background: var(--panel);
      padding: 2px 6px;
      border-radius: 8px;
      color: var(--muted);
    }
  </style>
</head>
<body>
  <div class="wrap">
    <header>
      <div>
        <h1>{{ title }}</h1>
        <div class="meta">{{ total_rows }} rows × {{ total_cols }} columns • spreadsheet-style render</div>
      </div>
      <div class="meta">Tip: scroll like a sheet, headers stay put.</div>
    </header>

    <div class="card">
      <div class="sheet-wrap">
        <div class="sheet">
          <div class="{{ corner_classes }}"></div>
          {%- for letter in column_letters %}
          <div class="{{ header_classes }}" data-col="{{ loop.index }}">{{ letter }}</div>
          {%- endfor %}
          {%- for row in rows %}
          <div class="{{ row_header_classes }}" data-row="{{ row.number }}"{% if row.style %} style="{{ row.style }}"{% endif %}>{{ row.number }}</div>
          {%- for cell in row.cells %}
          <div class="{{ cell.classes }}" data-r="{{ row.number }}" data-c="{{ loop.index }}" title="{{ cell.raw }}"{% if cell.style %} style="{{ cell.style }}"{% endif %}><span>{% if cell.raw %}{{ cell.raw }}{% else %}&nbsp;{% endif %}</span></div>
          {%- endfor %}
          {%- endfor %}
        </div>
      </div>
      <div class="toolbar">
        <div>
          <input id="q" type="search" placeholder="Search cells..." />
        </div>
        <div>
          <span id="shown"></span>
          <span style="margin-left:10px" class="kbd">CSV → Sheet HTML</span>
        </div>
      </div>
    </div>
  </div>

  <script>
    (function(){
      const q = document.getElementById("q");
      const cells = Array.from(document.querySelectorAll(".cell"));
      const shown = document.getElementById("shown");
      const total = cells.length;

      function apply(){
        const term = q.value.trim().toLowerCase();
        let visible = 0;
        for(const c of cells){
          const t = c.textContent.toLowerCase();
          const ok = !term || t.includes(term);
          c.style.display = ok ? "flex" : "none";
          if(ok) visible++;
        }
        shown.textContent = visible + " cells";
      }

      q.addEventListener("input", apply);
      shown.textContent = total + " cells";
    })();
  </script>
</body>
</html>
"""

_env = Environment(autoescape=True, keep_trailing_newline=True)
_template = _env.from_string(SHEET_TEMPLATE)


def column_name(n: int) -> str:
    """
    Spreadsheet column letters for a 1-based column number.

    Examples:
        1 -> "A", 26 -> "Z", 27 -> "AA", 703 -> "AAA"
    """
    name = ''
    while n > 0:
        n, remainder = divmod(n - 1, 26)
        name = chr(65 + remainder) + name
    return name


def is_probably_number(value: Optional[str]) -> bool:
    """True for values like "42", "-3.5" or "1,234.56"."""
    text = (value or '').strip()
    if not text:
        return False
    return bool(NUMBER_PATTERN.match(text.replace(',', '')))


def read_grid(path: Path | str) -> List[List[str]]:
    """
    Read a CSV file into a rectangular grid of strings.

    Blank lines are kept as empty rows and short rows are padded with
    empty cells up to the widest row.
    """
    path = Path(path)
    with open(path, encoding='utf-8-sig', newline='') as f:
        records = list(csv.reader(f))

    max_cols = max((len(r) for r in records), default=0)
    return [row + [''] * (max_cols - len(row)) for row in records]


def _cell_classes(raw: str) -> str:
    classes = ['cell']
    if raw == '':
        classes.append('empty')
    classes.append('num' if is_probably_number(raw) else 'text')
    return ' '.join(classes)


def render_sheet(grid: List[List[str]], options: Optional[SheetOptions] = None) -> str:
    """
    Render a grid as a standalone HTML document.

    The column-letter row and row-number column are sticky. Data rows before
    `freeze_rows - 1` and columns before `freeze_cols - 1` stick as well.

    Args:
        grid: Rows of cell strings (see read_grid())
        options: Title and layout settings

    Returns:
        HTML text
    """
    options = options or SheetOptions()
    total_rows = len(grid)
    total_cols = max((len(r) for r in grid), default=0)
    frozen_rows = max(options.freeze_rows - 1, 0)
    frozen_cols = max(options.freeze_cols - 1, 0)

    rows = []
    for r, record in enumerate(grid):
        row_sticky = r < frozen_rows
        row_top = f'top: calc(var(--colHdrH) + {r} * var(--cellH));' if row_sticky else ''

        cells = []
        for c in range(total_cols):
            raw = record[c] if c < len(record) else ''
            classes = _cell_classes(raw)
            style = row_top
            col_sticky = c < frozen_cols
            if col_sticky:
                style += f'left: calc(var(--rowHdrW) + {c} * var(--cellW));'
            if row_sticky or col_sticky:
                classes += ' sticky' + (' top' if row_sticky else '') + (' left' if col_sticky else '')
            cells.append({'raw': raw, 'classes': classes, 'style': style})

        rows.append({'number': r + 1, 'cells': cells, 'style': row_top})

    def sticky(base: str, top: bool, left: bool) -> str:
        if not (top or left):
            return base
        return base + ' sticky' + (' top' if top else '') + (' left' if left else '')

    return _template.render(
        title=options.title,
        cell_width=options.cell_width,
        cell_height=options.cell_height,
        total_rows=total_rows,
        total_cols=total_cols,
        column_letters=[column_name(c) for c in range(1, total_cols + 1)],
        corner_classes=sticky('corner', options.freeze_rows > 0, options.freeze_cols > 0),
        header_classes=sticky('colhdr', options.freeze_rows > 0, False),
        row_header_classes=sticky('rowhdr', False, options.freeze_cols > 0),
        rows=rows,
    )


def default_output_path(input_path: Path | str) -> Path:
    """"results.csv" -> "results.sheet.html"."""
    input_path = Path(input_path)
    stem = re.sub(r'\.csv$', '', input_path.name, flags=re.IGNORECASE)
    return input_path.with_name(f'{stem}.sheet.html')


def write_sheet(
    input_path: Path | str,
    output_path: Path | str | None = None,
    options: Optional[SheetOptions] = None,
) -> Path:
    """
    Render a CSV file to an HTML sheet file.

    Args:
        input_path: CSV file to render
        output_path: HTML file to write (default: <input>.sheet.html)
        options: Layout settings (default: title is the input file name)

    Returns:
        Path of the written HTML file
    """
    input_path = Path(input_path)
    output_path = Path(output_path) if output_path else default_output_path(input_path)
    options = options or SheetOptions(title=input_path.name)
    if not options.title:
        options = options.model_copy(update={'title': input_path.name})

    grid = read_grid(input_path)
    logger.debug(f'Read {len(grid)} row(s) from {input_path}')
    save_text(output_path, render_sheet(grid, options))
    logger.info(f'Wrote: {output_path}')
    return output_path
