#!/usr/bin/env python3
"""
filterhunt
==========

List WMI event filters (``__EventFilter``) across every namespace on this
machine, and optionally remove them.

Example usage
-------------

.. code-block:: bash

    # Every event filter below root
    filterhunt

    # Only root\\subscription and below, full WMI objects
    filterhunt --namespace root\\subscription --raw

    # Remove filters whose name contains "Updater" (asks first)
    filterhunt --remove Updater --like --namespace root\\subscription
"""

import logging

import click

from filterhunt import VERSION, getColoredLogger

from .common import set_log_level
from .connection import WMIConnector, WMIUnavailableError
from .defaults import CONFIRM_TOKEN
from .filters import enumerate_filters
from .namespaces import namespaces_to_scan
from .output import print_raw, print_records
from .remover import RemovalDeclined, remove_filters

logger = getColoredLogger("filterhunt")


def prompt_confirmation(preview):
    print_records(preview.records, title=f"Matching event filters in {preview.namespace}")
    return click.prompt(
        f"Remove {len(preview)} event filter(s)? [{CONFIRM_TOKEN}/N]",
        default="",
        show_default=False,
    )


def list_filters(connector, namespace=None, raw=False):
    '''
    Print the event filters of every namespace we scan, one namespace at a
    time, as soon as it has been queried.

    Returns (filters found, namespaces scanned).
    '''
    found = 0
    scanned = 0
    for ns in namespaces_to_scan(connector, namespace):
        scanned += 1
        records = enumerate_filters(connector, ns, raw=raw)
        if not records:
            continue
        found += len(records)
        if raw:
            print_raw(records)
        else:
            print_records(records)
    logger.info(f"Found {found} event filter(s) in {scanned} namespace(s)")
    return found, scanned


@click.command(
    name="filterhunt",
    help="List WMI event filters in every namespace and optionally remove them.",
)
@click.option("-n", "--namespace", default=None,
              help="Namespace to list (and everything below it) or to remove from. Default: all namespaces below root.")
@click.option("-r", "--remove", default=None,
              help="Name of the event filter(s) to remove. Prompts for a namespace if --namespace is not given.")
@click.option("--like", is_flag=True, default=False,
              help="Remove every filter whose name contains the --remove value.")
@click.option("--raw", is_flag=True, default=False,
              help="Print the full WMI object instead of Namespace/FilterName/EventNamespace/FilterQuery.")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Set log level to debug")
@click.version_option(VERSION, prog_name="filterhunt")
@click.pass_context
def main(ctx, namespace, remove, like, raw, verbose):
    if like and not remove:
        raise click.UsageError("--like only applies together with --remove")

    if verbose:
        set_log_level(logging.DEBUG)
        logger.debug("Verbose logging enabled")

    # A connector can be passed in as ctx.obj
    connector = ctx.obj if ctx.obj is not None else WMIConnector()

    try:
        if remove:
            if not namespace:
                namespace = click.prompt("Namespace")
            try:
                remove_filters(connector, namespace, remove, like, prompt_confirmation)
            except RemovalDeclined as e:
                logger.warning(str(e))
                raise click.Abort()

        list_filters(connector, namespace, raw=raw)
    except WMIUnavailableError as e:
        raise click.ClickException(str(e))


if __name__ == "__main__":
    main()
