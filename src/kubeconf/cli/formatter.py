# src/kubeconf/cli/formatter.py
import json
from typing import Dict, Any, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from kubeconf.core.models import ResolvedConfig

# Initialize the Rich console for high-quality terminal output
console = Console()

# Display order for the settings table
FIELD_ORDER = [
    "master_url", "api_version", "namespace", "trust_certs", "enabled_protocols",
    "ca_cert_file", "ca_cert_data", "client_cert_file", "client_cert_data",
    "client_key_file", "client_key_data", "client_key_algo", "client_key_passphrase",
    "username", "password", "oauth_token",
    "watch_reconnect_interval", "watch_reconnect_limit", "request_timeout", "proxy",
]


class KubeFormatter:
    """
    KubeFormatter: renders a ResolvedConfig for humans (table) or
    machines (JSON). Secrets are masked unless explicitly requested.
    """

    def render_value(self, value: Any) -> str:
        if value is None:
            return "[dim]-[/dim]"
        if isinstance(value, (list, tuple)):
            return ", ".join(str(v) for v in value)
        return str(value)

    def print_config_table(self, config: ResolvedConfig, show_secrets: bool = False,
                           source: Optional[str] = None):
        data = config.to_dict(mask_secrets=not show_secrets)

        table = Table(title="Resolved Client Configuration", show_header=True, header_style="bold magenta")
        table.add_column("Setting", style="cyan")
        table.add_column("Value", overflow="fold")

        for name in FIELD_ORDER:
            table.add_row(name, self.render_value(data.get(name)))

        console.print(table)
        if source:
            console.print(f"[dim]kubeconfig: {source}[/dim]")
        self.print_error_messages(data["error_messages"])

    def print_error_messages(self, messages: Dict[int, str]):
        """Lists the diagnostics registered for authentication failures."""
        if not messages:
            return
        lines = "\n".join(f"[bold]{code}[/bold]  {text}" for code, text in sorted(messages.items()))
        console.print(Panel(lines, title="Diagnostics", border_style="yellow"))

    def print_json(self, config: ResolvedConfig, show_secrets: bool = False):
        data = config.to_dict(mask_secrets=not show_secrets)
        data["error_messages"] = {str(k): v for k, v in data["error_messages"].items()}
        console.print_json(json.dumps(data))
