#!/usr/bin/env python3
"""
Entry point for dipscan
Reads the domain list, probes every resolved address and writes the CSV report
"""

import sys
import asyncio
import logging

if sys.platform.startswith("win"):
    # aiodns needs a selector based loop on Windows
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

from core.scan_config import get_scan_config, ScanConfig
from core.enhanced_logging import init_enhanced_logging
from core.domain_loader import load_domains
from core.async_scan_manager import AsyncScanManager
from core.reporter import ReportGenerator
from scanner.host_resolver import HostResolver
from scanner.port_scanner import AsyncPortScanner

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_IO_ERROR = 1
EXIT_CONFIG_ERROR = 2


def create_scan_manager(config: ScanConfig) -> AsyncScanManager:
    return AsyncScanManager(
        host_resolver=HostResolver(timeout=config.resolve_timeout),
        port_scanner=AsyncPortScanner(timeout=config.timeout),
    )


def main() -> int:
    reporter = ReportGenerator()

    try:
        config = get_scan_config()
    except ValueError as e:
        reporter.print_error(f"Invalid configuration: {e}")
        return EXIT_CONFIG_ERROR

    try:
        log = init_enhanced_logging("dipscan", config.logs_dir, config.log_level)
    except OSError as e:
        reporter.print_error(f"Cannot create log directory {config.logs_dir}: {e}")
        return EXIT_IO_ERROR
    logger.info(f"Starting scan with config: {config.to_dict()}")

    try:
        domains = load_domains(config.input_file)
    except (OSError, UnicodeDecodeError) as e:
        log.log_error(e, context=f"reading {config.input_file}")
        reporter.print_error(f"Cannot read domain list {config.input_file}: {e}")
        return EXIT_IO_ERROR

    manager = create_scan_manager(config)
    outcome = asyncio.run(manager.scan(
        domains, config.ports, config.timeout,
        on_resolved=reporter.print_resolved,
        probe_status=reporter.status,
    ))

    for result in outcome.results:
        reporter.print_probe_result(result)

    table = reporter.build(outcome.results, config.ports)
    try:
        reporter.save_report(table, config.output_file)
    except OSError as e:
        log.log_error(e, context=f"writing {config.output_file}")
        reporter.print_error(f"Cannot write report {config.output_file}: {e}")
        return EXIT_IO_ERROR

    reporter.print_summary(domains, outcome.failed_domains, outcome.results, table)
    reporter.print_scan_complete()
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
