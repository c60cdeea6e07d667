#!/usr/bin/env python3
"""
KUBECONF CLI - Configuration Inspector
--------------------------------------
Shows which connection and authentication settings a client running in
the current shell (or pod) would end up with, and explains the
diagnostics registered for 401/403 responses.

Author: KubeConf Team
Date: 2026-10-19
"""

import sys
import logging
import argparse
from typing import List, Dict, Optional

from rich.console import Console
from rich.panel import Panel

from kubeconf.core import environment as settings
from kubeconf.core.environment import EnvironmentResolver
from kubeconf.core.resolver import ConfigResolver
from kubeconf.cli.formatter import KubeFormatter

# Global console for consistent styling across the application
console = Console()

VERSION = "kubeconf v1.0.0"


class KubeConfCLI:
    """
    CLI wrapper that translates flags into resolver inputs.
    Flags become explicit values or property overrides, never both.
    """

    def __init__(self):
        """Initializes the CLI and sets up the argument parser."""
        self.parser = argparse.ArgumentParser(
            prog="kubeconf",
            description="KubeConf - Kubernetes client configuration resolver",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        self.formatter = KubeFormatter()
        self._setup_args()

    def _add_source_args(self, parser: argparse.ArgumentParser):
        parser.add_argument("--kubeconfig", help="Kubeconfig file (default: ~/.kube/config)")
        parser.add_argument("--no-service-account", action="store_true", help="Ignore the mounted service account")
        parser.add_argument("--no-kubeconfig", action="store_true", help="Ignore the kubeconfig file")
        parser.add_argument("--master", help="Explicit API server URL")
        parser.add_argument("--namespace", help="Explicit namespace")

    def _setup_args(self):
        """Configures the command-line flags and subcommands."""
        self.parser.add_argument("--version", action="version", version=VERSION)
        self.parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
        subparsers = self.parser.add_subparsers(dest="command", metavar="Command")

        show_parser = subparsers.add_parser("show", help="Print the resolved configuration")
        self._add_source_args(show_parser)
        show_parser.add_argument("--json", action="store_true", help="Emit JSON instead of a table")
        show_parser.add_argument("--show-secrets", action="store_true", help="Do not mask tokens and passwords")

        explain_parser = subparsers.add_parser("explain", help="Show the diagnostic for an HTTP status")
        self._add_source_args(explain_parser)
        explain_parser.add_argument("status", type=int, help="HTTP status code, e.g. 401")

    def print_header(self, subtitle: str):
        console.print(Panel.fit(
            f"[bold cyan]{VERSION}[/bold cyan]",
            title=f"[bold white]{subtitle}[/bold white]",
            border_style="cyan"
        ))

    def build_properties(self, args: argparse.Namespace) -> Dict[str, str]:
        """Maps source flags onto property-store overrides."""
        properties = {}
        if args.kubeconfig:
            properties[settings.KUBECONFIG_FILE] = args.kubeconfig
        if args.no_service_account:
            properties[settings.KUBERNETES_AUTH_TRY_SERVICE_ACCOUNT] = "false"
        if args.no_kubeconfig:
            properties[settings.KUBERNETES_AUTH_TRY_KUBECONFIG] = "false"
        return properties

    def _resolve(self, args: argparse.Namespace):
        resolver = ConfigResolver(environment=EnvironmentResolver(properties=self.build_properties(args)))
        explicit = {}
        if args.master:
            explicit["master_url"] = args.master
        if args.namespace:
            explicit["namespace"] = args.namespace
        return resolver, resolver.resolve(**explicit)

    def _show(self, args: argparse.Namespace) -> int:
        resolver, config = self._resolve(args)
        if args.json:
            self.formatter.print_json(config, show_secrets=args.show_secrets)
            return 0

        self.print_header("Resolved Configuration")
        source = None if args.no_kubeconfig else str(resolver.kubeconfig_path())
        self.formatter.print_config_table(config, show_secrets=args.show_secrets, source=source)
        return 0

    def _explain(self, args: argparse.Namespace) -> int:
        _, config = self._resolve(args)
        message = config.error_message(args.status)
        if message is None:
            console.print(f"[yellow]No diagnostic registered for HTTP {args.status}.[/yellow]")
            return 1
        console.print(f"[bold]{args.status}[/bold] {message}")
        return 0

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Primary routing entry point."""
        argv = sys.argv[1:] if argv is None else argv
        if not argv:
            self.print_header("Kubernetes Client Configuration")
            self.parser.print_help()
            return 0

        args = self.parser.parse_args(argv)
        logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

        if args.command == "show":
            return self._show(args)
        if args.command == "explain":
            return self._explain(args)
        self.parser.print_help()
        return 0


def main():
    """Application entry point with interrupt handling."""
    try:
        sys.exit(KubeConfCLI().run())
    except KeyboardInterrupt:
        console.print("\n[bold red]Terminated by user.[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
