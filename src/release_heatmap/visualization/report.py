"""Generate a self-contained HTML calendar heatmap report.

The report embeds every quarter of the dataset's years (plus the year
requested for first display) as a JSON blob inside a ``<script>`` tag.
Treemap boxes, heat colours and gaps are computed in Python, as are the
neighbouring quarters each view links to.  The page script positions
elements, follows those links and re-shades days when the hue slider
moves, so the file opens from any local file:// path.
"""

import json
from pathlib import Path
from typing import Optional

from ..exceptions import InvalidPeriodError
from ..palette import CategoryPalette, hue_name
from ..records.store import RecordStore
from ..temporal.index import TemporalIndex
from .calendar import DETAIL_LABELS, build_calendar_data, quarter_key
from .treemap import DEFAULT_MIN_EXTENT, Rectangle


def generate_report(
    store: RecordStore,
    year: Optional[int] = None,
    quarter: int = 0,
    output_path: str = "release-heatmap.html",
    scheme: str = "blue",
    palette: Optional[CategoryPalette] = None,
    bounds: Optional[Rectangle] = None,
    min_extent: float = DEFAULT_MIN_EXTENT,
    hue: Optional[int] = None,
) -> str:
    """Write the quarterly calendar report and return its absolute path.

    Parameters
    ----------
    store:
        Release records to visualise.
    year:
        Year shown on first load (default: first year of the data).
    quarter:
        0-based quarter shown on first load.
    output_path:
        Where to write the HTML file.
    scheme:
        Heatmap colour scheme for day cells.
    palette:
        Category colours for the treemap cells and statistics panel.
    bounds:
        Abstract treemap rectangle (default 0..100 on each axis).
    min_extent:
        Fraction of each treemap side below which a day's layout stops.
    hue:
        Shade day cells on this hue (0-359) instead of *scheme*; the page
        then shows a hue slider.
    """
    if not 0 <= quarter <= 3:
        raise InvalidPeriodError("quarter must be 0-3", quarter=quarter)
    index = TemporalIndex(store, palette=palette)
    first_year, last_year = store.year_range()
    if year is None:
        year = first_year

    # Data years plus the requested year alone, not the years in between
    years = sorted(set(range(first_year, last_year + 1)) | {year})
    nav_range = (years[0], years[-1])
    quarters = {
        quarter_key(y, q): build_calendar_data(
            index,
            y,
            q,
            scheme=scheme,
            bounds=bounds,
            min_extent=min_extent,
            hue=hue,
            year_range=nav_range,
        )
        for y in years
        for q in range(4)
    }
    for data in quarters.values():
        for key in ("prev", "next"):
            if data[key] not in quarters:
                data[key] = None

    data_json = json.dumps(
        {
            "initial": quarter_key(year, quarter),
            "year_range": [first_year, last_year],
            "record_count": len(store),
            "hue": hue,
            "hue_names": [hue_name(h) for h in range(360)] if hue is not None else [],
            "detail_labels": DETAIL_LABELS,
            "quarters": quarters,
        }
    )

    html = _build_html(data_json.replace("</", "<\\/"))

    out = Path(output_path).resolve()
    out.write_text(html, encoding="utf-8")
    return str(out)


# ── Private helpers ──────────────────────────────────────────────────


def _build_html(data_json: str) -> str:
    """Build self-contained HTML with the embedded calendar renderer."""
    # f-string: {{ / }} produce literal braces in the CSS and JS.
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>Release Heatmap</title>
<style>
* {{ margin: 0; padding: 0; box-sizing: border-box; }}
body {{ font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif; background: #f8f9fa; color: #212529; }}
#header {{ padding: 24px 32px; border-bottom: 1px solid #dee2e6; display: flex; align-items: center; gap: 24px; }}
#header h1 {{ font-size: 24px; color: #0E71EB; }}
#nav button {{ background: #fff; border: 1px solid #ced4da; border-radius: 6px; padding: 6px 12px; cursor: pointer; }}
#quarter-label {{ font-size: 18px; font-weight: 600; margin: 0 12px; }}
#layout {{ display: flex; gap: 24px; padding: 24px 32px; }}
#calendar {{ flex: 1; display: grid; grid-template-columns: repeat(3, 1fr); gap: 16px; }}
.month-header {{ font-weight: 600; margin-bottom: 8px; }}
.month-feature-count {{ color: #6c757d; font-weight: 400; }}
.month-grid {{ display: grid; grid-template-columns: repeat(7, 1fr); gap: 2px; }}
.calendar-header-cell {{ font-size: 11px; text-align: center; color: #6c757d; }}
.calendar-day {{ position: relative; aspect-ratio: 1; background: #fff; border: 1px solid #e9ecef; border-radius: 4px; overflow: hidden; font-size: 10px; cursor: pointer; }}
.calendar-day.empty {{ background: transparent; border: none; cursor: default; }}
.day-number {{ position: absolute; top: 2px; left: 3px; z-index: 2; }}
.day-releases {{ position: absolute; top: 2px; right: 3px; z-index: 2; font-weight: 600; }}
.days-since-release {{ position: absolute; bottom: 2px; right: 3px; z-index: 2; color: #6c757d; }}
.day-treemap {{ position: absolute; inset: 30% 8% 8% 8%; }}
.treemap-cell {{ position: absolute; border: 1px solid #fff; }}
#stats {{ width: 280px; background: #fff; border: 1px solid #dee2e6; border-radius: 8px; padding: 16px; }}
#stats h2 {{ font-size: 16px; margin-bottom: 8px; }}
#total {{ font-size: 28px; font-weight: 600; color: #0E71EB; margin-bottom: 12px; }}
.category-item {{ display: flex; align-items: center; gap: 8px; padding: 4px 0; font-size: 13px; }}
.category-dot {{ width: 10px; height: 10px; border-radius: 50%; }}
.category-name {{ flex: 1; }}
#details {{ padding: 0 32px 24px; }}
#details h3 {{ margin: 12px 0 8px; }}
#hue-control {{ display: flex; align-items: center; gap: 8px; font-size: 13px; }}
#hue-control[hidden] {{ display: none; }}
#nav button:disabled {{ opacity: 0.4; cursor: default; }}
.detail-treemap {{ position: relative; height: 220px; max-width: 480px; margin-bottom: 12px; }}
.detail-treemap .treemap-cell {{ cursor: pointer; }}
.filter-note {{ font-size: 13px; color: #6c757d; margin-bottom: 8px; }}
.category-group {{ margin-bottom: 12px; }}
.category-header {{ font-weight: 600; border-left: 4px solid; padding-left: 8px; margin-bottom: 4px; }}
.category-count {{ color: #6c757d; font-weight: 400; }}
.feature-item {{ font-size: 13px; padding: 4px 0 4px 12px; border-bottom: 1px solid #e9ecef; }}
.feature-meta {{ color: #6c757d; font-size: 12px; }}
.feature-meta span {{ margin-right: 12px; }}
footer {{ padding: 24px 32px; text-align: center; color: #adb5bd; font-size: 12px; border-top: 1px solid #dee2e6; }}
</style>
</head>
<body>
<div id="header">
  <h1>Release Heatmap</h1>
  <div id="nav"><button id="prev">&lsaquo;</button><span id="quarter-label"></span><button id="next">&rsaquo;</button></div>
  <div id="hue-control" hidden><label for="hue">Hue</label><input type="range" id="hue" min="0" max="359"><span id="hue-name"></span></div>
</div>
<div id="layout">
  <div id="calendar"></div>
  <div id="stats"><h2>Features this quarter</h2><div id="total"></div><div id="categories"></div></div>
</div>
<div id="details"></div>
<footer>Generated by Release Heatmap</footer>

<script>
// All report data embedded at generation time.
const DATA = {data_json};
var current = DATA.initial;

function escapeHtml(s) {{
  return String(s).replace(/&/g, "&amp;").replace(/</g, "&lt;").replace(/>/g, "&gt;").replace(/"/g, "&quot;");
}}

var selected = null;

function renderCells(cells) {{
  return cells.map(function(c) {{
    return '<div class="treemap-cell" data-category="' + escapeHtml(c.category) + '" title="' +
      escapeHtml(c.category + " (" + c.value + ")") + '" style="left:' + c.left + '%;top:' + c.top +
      '%;width:' + c.width + '%;height:' + c.height + '%;background:' + c.color + '"></div>';
  }}).join("");
}}

function dayColor(d) {{
  if (!d.count) return null;
  if (DATA.hue === null) return d.heat;
  return "hsl(" + DATA.hue + ", 70%, " + (100 - d.ratio * 50) + "%)";
}}

function renderQuarter(key) {{
  var q = DATA.quarters[key];
  current = key;
  selected = null;
  document.getElementById("quarter-label").textContent = q.label;
  document.getElementById("prev").disabled = !q.prev;
  document.getElementById("next").disabled = !q.next;
  document.getElementById("details").innerHTML = "";
  document.getElementById("calendar").innerHTML = q.months.map(function(m, mi) {{
    var cells = q.day_names.map(function(d) {{ return '<div class="calendar-header-cell">' + d + '</div>'; }});
    for (var i = 0; i < m.leading_blanks; i++) cells.push('<div class="calendar-day empty"></div>');
    m.days.forEach(function(d, di) {{
      var color = dayColor(d);
      var style = color ? ' style="background:' + color + '"' : "";
      var html = '<div class="calendar-day" data-month="' + mi + '" data-day="' + di + '"' + style + '>';
      html += '<div class="day-number">' + d.day + '</div>';
      if (d.count > 0) html += '<div class="day-releases">' + d.count + '</div><div class="day-treemap">' + renderCells(d.cells) + '</div>';
      if (d.days_since > 0) html += '<div class="days-since-release">' + d.days_since + 'd</div>';
      cells.push(html + '</div>');
    }});
    return '<div class="month-container"><div class="month-header">' + m.name +
      ' <span class="month-feature-count">(' + m.feature_count + ')</span></div>' +
      '<div class="month-grid">' + cells.join("") + '</div></div>';
  }}).join("");

  document.getElementById("total").textContent = q.summary.total;
  var cats = q.summary.categories;
  document.getElementById("categories").innerHTML = cats.length ? cats.map(function(c) {{
    return '<div class="category-item"><div class="category-dot" style="background:' + c.color +
      '"></div><div class="category-name">' + escapeHtml(c.name) + '</div><div>' + c.count + '</div></div>';
  }}).join("") : '<div style="color: #6c757d; font-style: italic;">No data available</div>';
}}

function renderFeature(f) {{
  var meta = DATA.detail_labels.filter(function(l) {{
    var v = f.details[l[0]];
    return v !== undefined && v !== null && !(Array.isArray(v) && !v.length);
  }}).map(function(l) {{
    var v = f.details[l[0]];
    return '<span>' + l[1] + ': ' + escapeHtml(Array.isArray(v) ? v.join(", ") : v) + '</span>';
  }});
  return '<div class="feature-item"><div>' + escapeHtml(f.description) + '</div>' +
    (meta.length ? '<div class="feature-meta">' + meta.join("") + '</div>' : '') + '</div>';
}}

function showDay(month, day, category) {{
  var m = DATA.quarters[current].months[month];
  var d = m.days[day];
  if (!d.count) return;
  selected = {{ month: month, day: day }};
  var html = '<h3>' + m.name + ' ' + d.day + ', ' + m.year + ' &mdash; ' + d.count + ' features</h3>';
  html += '<div class="detail-treemap">' + renderCells(d.cells) + '</div>';
  if (category) html += '<div class="filter-note">Showing ' + escapeHtml(category) + ' only &middot; <a href="#" id="clear-filter">show all</a></div>';
  d.groups.forEach(function(g) {{
    if (category && g.category !== category) return;
    html += '<div class="category-group"><div class="category-header" style="border-left-color:' + g.color + '">' +
      escapeHtml(g.category) + ' <span class="category-count">(' + g.count + ')</span></div>' +
      g.features.map(renderFeature).join("") + '</div>';
  }});
  document.getElementById("details").innerHTML = html;
}}

function step(delta) {{
  var key = delta < 0 ? DATA.quarters[current].prev : DATA.quarters[current].next;
  if (key) renderQuarter(key);
}}

document.getElementById("prev").addEventListener("click", function() {{ step(-1); }});
document.getElementById("next").addEventListener("click", function() {{ step(1); }});
document.getElementById("calendar").addEventListener("click", function(e) {{
  var cell = e.target.closest(".calendar-day");
  if (cell && cell.dataset.day !== undefined) showDay(parseInt(cell.dataset.month), parseInt(cell.dataset.day), null);
}});
document.getElementById("details").addEventListener("click", function(e) {{
  if (!selected) return;
  if (e.target.id === "clear-filter") {{
    e.preventDefault();
    showDay(selected.month, selected.day, null);
    return;
  }}
  var cell = e.target.closest(".treemap-cell");
  if (cell) showDay(selected.month, selected.day, cell.dataset.category);
}});

if (DATA.hue !== null) {{
  var slider = document.getElementById("hue");
  var label = document.getElementById("hue-name");
  slider.value = DATA.hue;
  label.textContent = DATA.hue_names[DATA.hue];
  document.getElementById("hue-control").hidden = false;
  slider.addEventListener("input", function() {{
    DATA.hue = parseInt(slider.value);
    label.textContent = DATA.hue_names[DATA.hue];
    var shown = selected;
    renderQuarter(current);
    if (shown) showDay(shown.month, shown.day, null);
  }});
}}

renderQuarter(current);
</script>
</body>
</html>
"""
