from core.models import ProbeResult, ReportRow, ReportTable, ResolvedAddress, PortStatus
import csv
import io
from rich.console import Console
from rich.table import Table
from rich.text import Text
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

logger = logging.getLogger(__name__)
console = Console()


class ReportGenerator:
    """Builds the per-(domain, ip) port table and writes it out as CSV"""

    def __init__(self, output: Optional[Console] = None):
        self.console = output or console

    def build(self, results: Iterable[ProbeResult], ports: List[int]) -> ReportTable:
        """
        Fold probe results into rows keyed by (domain, ip).

        Rows keep the order in which their (domain, ip) was first seen,
        grouped by domain. The order of `results` does not change which
        cells are OK.
        """
        port_set = set(ports)
        by_domain: Dict[str, Dict[str, Dict[int, PortStatus]]] = {}

        for result in results:
            if result.port not in port_set:
                logger.debug(f"Ignoring result for unlisted port {result.port}")
                continue
            by_domain.setdefault(result.domain, {}).setdefault(result.ip, {})[result.port] = result.status

        rows = [
            ReportRow(domain=domain, ip=ip, ports=statuses)
            for domain, ips in by_domain.items()
            for ip, statuses in ips.items()
        ]
        return ReportTable(ports=list(ports), rows=rows)

    def serialize(self, table: ReportTable) -> str:
        """Every cell quoted, CRLF after every row, one column per port"""
        buffer = io.StringIO()
        writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator='\r\n')
        writer.writerow(table.columns)
        writer.writerows(report_cells(table))
        return buffer.getvalue()

    def save_report(self, table: ReportTable, output_path: Union[str, Path]) -> Path:
        """
        Overwrite output_path with the serialized table (UTF-8, CRLF kept as is).
        OSError propagates to the caller.
        """
        output_path = Path(output_path)
        with open(output_path, 'w', encoding='utf-8', newline='') as f:
            f.write(self.serialize(table))

        logger.info(f"Report saved to {output_path} ({len(table.rows)} rows)")
        return output_path

    def print_resolved(self, addresses: List[ResolvedAddress]):
        """Print each domain followed by its addresses"""
        current = None
        for address in addresses:
            if address.domain != current:
                current = address.domain
                self.console.print(Text(f"domain: {address.domain}"))
            self.console.print(Text(f"-> ip: {address.ip}"))

    def print_probe_result(self, result: ProbeResult):
        if result.is_open:
            status = Text("open", style="bold green")
        else:
            status = Text("closed", style="bold red")
        self.console.print(Text.assemble(f"[{result.domain}] {result.ip}:{result.port} is ", status))

    def print_summary(self, domains: List[str], failed_domains: List[str],
                      results: List[ProbeResult], table: ReportTable):
        """Print scan summary to console"""
        open_count = sum(1 for r in results if r.is_open)

        summary = Table(title="dipscan summary")
        summary.add_column("Item", style="cyan", no_wrap=True)
        summary.add_column("Count", justify="right")
        summary.add_row("Domains", str(len(domains)))
        summary.add_row("Unresolved", str(len(failed_domains)))
        summary.add_row("Report rows", str(len(table.rows)))
        summary.add_row("Probes", str(len(results)))
        summary.add_row("Open", str(open_count))
        self.console.print(summary)

        for domain in failed_domains:
            self.console.print(Text(f"unresolved: {domain}", style="yellow"))

    def print_error(self, message: str):
        """Print error message"""
        self.console.print(Text(f"[ERROR] {message}", style="bold red"))

    def status(self, message: str = "checking ports, please, wait..."):
        """Spinner shown while probes are in flight"""
        return self.console.status(Text(message, style="bold yellow"))

    def print_scan_complete(self):
        self.console.print("finished")


def report_cells(table: ReportTable) -> List[Tuple[str, ...]]:
    """Rows as tuples of rendered cells, header excluded"""
    return [tuple([row.domain, row.ip] + [row.cell(port) for port in table.ports]) for row in table.rows]
