# link_scout/report/json_report.py

"""
JSON report generation for LinkScout.

Serializes a ScanReport into a file.
"""
from pathlib import Path

from link_scout.aggregator import ScanReport


def render_json(report: ScanReport, output_path: Path | str, *, pretty: bool = False) -> Path:
    """
    Save *report* as JSON at *output_path*.

    :param report: ScanReport with the scan data
    :param output_path: path of the JSON file
    :return: Path of the saved file

    Example:
    ```python
    from link_scout.report.json_report import render_json
    report_path = render_json(report, 'reports/report.json')
    print(f"JSON report saved to: {report_path}")
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(report.json(pretty=pretty), encoding="utf-8")
    return output
