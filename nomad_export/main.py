#!/usr/bin/env python3
"""
Main CLI entry point for nomad-export
"""

import logging
from typing import List, Optional

import typer

from nomad_export import __version__
from nomad_export.client import NomadClient
from nomad_export.config import EXCLUDABLE_DATA_TYPES, ClientSettings
from nomad_export.exclusions import ExclusionSet
from nomad_export.exporter import Exporter
from nomad_export.utils.cli import handle_cli_errors
from nomad_export.utils.logging_utils import level_for_flags, setup_logging
from nomad_export.utils.output import console, is_stdout, serialize_document, write_output

logger = logging.getLogger("nomad_export.cli")

app = typer.Typer(
    help="Export namespaces and jobs from a Nomad cluster as JSON",
    no_args_is_help=True,
)


@app.command("export")
@handle_cli_errors("exporting data")
def export_data(
    output_path: Optional[str] = typer.Argument(
        None, help="File to write the export to; - or nothing writes to stdout"
    ),
    output: Optional[str] = typer.Option(
        None, "--output", "-o", help="File path to output the data to. Defaults to stdout"
    ),
    exclude: Optional[List[str]] = typer.Option(
        None,
        "--exclude",
        "-e",
        help="Data types to exclude from the export. Can be specified multiple times. "
        f"Valid values are: {', '.join(EXCLUDABLE_DATA_TYPES)}",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose debugging output"),
    silent: bool = typer.Option(False, "--silent", "-s", help="Disables all normal log output"),
    address: Optional[str] = typer.Option(
        None,
        "--address",
        help="The address of the Nomad server. Overrides NOMAD_ADDR. "
        "Default = http://127.0.0.1:4646",
    ),
    token: Optional[str] = typer.Option(
        None, "--token", help="The SecretID of an ACL token. Overrides NOMAD_TOKEN"
    ),
    token_file: Optional[str] = typer.Option(
        None, "--token-file", help="File containing the ACL token. Overrides NOMAD_TOKEN_FILE"
    ),
    ca_cert: Optional[str] = typer.Option(
        None, "--ca-cert", help="PEM encoded CA cert file to verify the server. Overrides NOMAD_CACERT"
    ),
    ca_path: Optional[str] = typer.Option(
        None,
        "--ca-path",
        help="Directory of PEM encoded CA cert files. If both --ca-cert and --ca-path are "
        "specified, --ca-cert is used. Overrides NOMAD_CAPATH",
    ),
    client_cert: Optional[str] = typer.Option(
        None,
        "--client-cert",
        help="PEM encoded client certificate for TLS authentication. Must also specify "
        "--client-key. Overrides NOMAD_CLIENT_CERT",
    ),
    client_key: Optional[str] = typer.Option(
        None,
        "--client-key",
        help="Unencrypted PEM encoded private key matching --client-cert. "
        "Overrides NOMAD_CLIENT_KEY",
    ),
    tls_server_name: Optional[str] = typer.Option(
        None,
        "--tls-server-name",
        help="The server name to use as the SNI host when connecting via TLS. "
        "Overrides NOMAD_TLS_SERVER_NAME",
    ),
    timeout: Optional[int] = typer.Option(
        None, "--timeout", help="Seconds to wait for each API request. Overrides NOMAD_EXPORT_TIMEOUT"
    ),
):
    """Export Nomad namespaces and jobs.

    Examples:

        # Print the export to stdout
        nomad-export export

        # Write it to a file, leaving out ACL data
        nomad-export export snapshot.json --exclude acls
    """
    if verbose and silent:
        console.print("[red]Error: Cannot specify both --silent and --verbose[/red]")
        raise typer.Exit(1)

    setup_logging(level_for_flags(verbose, silent))

    exclusions = ExclusionSet.from_values(exclude)
    settings = ClientSettings.from_env().merge(
        address=address,
        token=token,
        token_file=token_file,
        ca_cert=ca_cert,
        ca_path=ca_path,
        client_cert=client_cert,
        client_key=client_key,
        tls_server_name=tls_server_name,
        timeout=timeout,
    )
    destination = output or output_path

    logger.info("starting data export")
    with NomadClient(settings) as client:
        document = Exporter(client, exclusions).export()

    write_output(serialize_document(document), destination)
    if not is_stdout(destination):
        logger.info("data written to file %s", destination)


@app.command("version")
def version():
    """Show nomad-export version"""
    typer.echo(f"nomad-export version {__version__}")


def run():
    """Entry point for the CLI"""
    app()


if __name__ == "__main__":
    run()
