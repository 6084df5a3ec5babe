# sitemap_service/report/json_report.py

"""
JSON output of a crawled sitemap.

The tree is written in the same ``children`` / ``title`` / ``url`` shape
that the HTTP surface returns.
"""
import json
from pathlib import Path

from sitemap_service.crawler.models import SitemapNode


def render_json(node: SitemapNode, output_path: Path | str, *, pretty: bool = True) -> Path:
    """
    Save the sitemap rooted at *node* as JSON at *output_path*.

    :param node: root of the sitemap
    :param output_path: path of the JSON file
    :param pretty: indent the output by 2 spaces
    :return: Path of the saved file

    Example:
    ```python
    from sitemap_service.report.json_report import render_json
    report_path = render_json(root, 'reports/sitemap.json')
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(node.to_dict(), f, ensure_ascii=False, indent=2 if pretty else None)

    return output
