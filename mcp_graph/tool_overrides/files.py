"""
OneDrive, Excel and OneNote overrides
파일, 워크북, 노트북 도구의 schema와 경로 변환
"""

from typing import Any, Dict

from ..graph_types import OverrideRecord
from ..override_registry import OverrideRegistry
from .common import choice, flag, integer, number, text

CHART_SERIES_BY = ("Auto", "Columns", "Rows")


def build_range_format(p: Dict[str, Any]) -> Dict[str, Any]:
    result: Dict[str, Any] = {}

    font: Dict[str, Any] = {}
    if p.get("bold") is not None:
        font["bold"] = p["bold"]
    if p.get("italic") is not None:
        font["italic"] = p["italic"]
    if p.get("fontSize"):
        font["size"] = p["fontSize"]
    if p.get("fontColor"):
        font["color"] = p["fontColor"]
    if font:
        result["font"] = font

    if p.get("fillColor"):
        result["fill"] = {"color": p["fillColor"]}
    if p.get("numberFormat"):
        result["numberFormat"] = p["numberFormat"]
    return result


def build_range_sort(p: Dict[str, Any]) -> Dict[str, Any]:
    sort: Dict[str, Any] = {
        "fields": [{"key": p.get("columnIndex"), "ascending": p.get("ascending") is not False}]
    }
    if p.get("hasHeaders") is not None:
        sort["hasHeaders"] = p["hasHeaders"]
    return sort


def build_chart(p: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "type": p.get("type"),
        "sourceData": p.get("sourceData"),
        "seriesBy": p.get("seriesBy") or "Auto",
    }


def build_onenote_page(p: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "contentType": "text/html",
        "content": (
            f"<html><head><title>{p.get('title')}</title></head>"
            f"<body>{p.get('content')}</body></html>"
        ),
    }


def register(registry: OverrideRegistry) -> None:
    # ── OneDrive ──────────────────────────────────────────────────────────
    registry.register("list-drives", OverrideRecord(
        description="List your OneDrive drives. Returns drive IDs used by the other file tools.",
    ))

    registry.register("get-drive-root-item", OverrideRecord(
        description="Get the root folder of a drive. Its ID is the starting point for list-folder-files.",
    ))

    registry.register("list-folder-files", OverrideRecord(
        description="List files and folders inside a drive folder.",
    ))

    registry.register("download-onedrive-file-content", OverrideRecord(
        description="Download the content of a file. Binary content is returned base64-encoded.",
    ))

    registry.register("upload-file-content", OverrideRecord(
        description="Upload or replace file content in OneDrive.",
        schema={"content": text("File content (text or base64 for binary)", required=True)},
        body_transform=lambda p: p.get("content"),
    ))

    registry.register("delete-onedrive-file", OverrideRecord(
        description="Delete a file or folder from OneDrive. It is moved to the recycle bin.",
    ))

    # ── Excel ─────────────────────────────────────────────────────────────
    registry.register("list-excel-worksheets", OverrideRecord(
        description="List the worksheets of an Excel workbook stored in OneDrive.",
    ))

    registry.register("get-excel-range", OverrideRecord(
        description='Read cell values from an Excel worksheet range, e.g. address "A1:C10".',
    ))

    registry.register("create-excel-chart", OverrideRecord(
        description="Create a chart in an Excel worksheet.",
        schema={
            "type": text('Chart type: "ColumnClustered", "Pie", "Line", "Bar", "Area", "XYScatter"', required=True),
            "sourceData": text('Data range, e.g. "A1:B5"', required=True),
            "seriesBy": choice(CHART_SERIES_BY, 'Data series orientation (default: "Auto")'),
        },
        body_transform=build_chart,
    ))

    registry.register("format-excel-range", OverrideRecord(
        description="Format cells in an Excel worksheet range.",
        schema={
            "bold": flag("Make text bold"),
            "italic": flag("Make text italic"),
            "fontSize": number("Font size in points"),
            "fontColor": text('Font color hex, e.g. "#FF0000"'),
            "fillColor": text('Background color hex, e.g. "#FFFF00"'),
            "numberFormat": text('Number format, e.g. "$#,##0.00", "0%"'),
        },
        body_transform=build_range_format,
    ))

    registry.register("sort-excel-range", OverrideRecord(
        description="Sort a range of cells in an Excel worksheet.",
        schema={
            "columnIndex": integer("Column index to sort by (0-based)", required=True),
            "ascending": flag("Sort ascending (default: true)"),
            "hasHeaders": flag("Range has a header row (default: false)"),
        },
        body_transform=build_range_sort,
    ))

    # ── OneNote ───────────────────────────────────────────────────────────
    registry.register("list-onenote-notebooks", OverrideRecord(
        description="List your OneNote notebooks.",
    ))

    registry.register("list-onenote-notebook-sections", OverrideRecord(
        description="List the sections of a OneNote notebook.",
    ))

    registry.register("list-onenote-section-pages", OverrideRecord(
        description="List the pages in a OneNote section.",
    ))

    registry.register("get-onenote-page-content", OverrideRecord(
        description="Get the HTML content of a OneNote page.",
    ))

    registry.register("create-onenote-page", OverrideRecord(
        description="Create a OneNote page with a title and HTML content.",
        schema={
            "title": text("Page title", required=True),
            "content": text("Page content (plain text or HTML)", required=True),
        },
        body_transform=build_onenote_page,
    ))
