"""CLI entry point for the GridION run audit."""

import sys
from types import SimpleNamespace

import click

from gridion_audit.adapters import StorageClient
from gridion_audit.data_access import GridIONRun, RemoteRepositoryAccess
from gridion_audit.models import AuditConfig, CheckCounts, RunIdentity
from gridion_audit.services import GridIONRunAuditor, RunAuditLogger


def audit_gridion_run(config: AuditConfig) -> CheckCounts:
    """
    Audit one GridION run directory against the remote repository.

    Args:
        config: Audit configuration

    Returns:
        Total (num_files, num_present, num_errors)
    """
    identity = RunIdentity.from_source_dir(config.gridion_name, config.source_dir)
    audit_logs = RunAuditLogger(
        identity.name, level=config.log_level, log_file=config.log_file
    )
    audit_logs.log_initialization(config)

    run = GridIONRun(config.gridion_name, config.source_dir, config.output_dir)
    repository = RemoteRepositoryAccess(
        config.dest_collection, StorageClient(project=config.gcp_project)
    )
    auditor = GridIONRunAuditor(
        run,
        repository,
        audit_logs=audit_logs,
        num_replicas=config.num_replicas,
        info_count_interval=config.info_count_interval,
        compressed_suffix=config.compressed_suffix,
    )

    counts = auditor.check_all_files()
    audit_logs.log_summary(counts)
    return counts


@click.command()
@click.option(
    '--source-dir',
    '-s',
    required=True,
    help='The run device directory, <experiment_name>/<device_id>',
)
@click.option(
    '--output-dir',
    '-o',
    help='Directory holding the tar manifests, defaulting to the source directory',
)
@click.option(
    '--gridion-name',
    '-g',
    required=True,
    help='Name of the GridION instrument',
)
@click.option(
    '--dest-collection',
    '-d',
    help='Root collection the run was archived to, e.g. gs://bucket/gridion',
)
@click.option(
    '--num-replicas',
    '-n',
    type=int,
    help='Minimum number of valid replicas expected for each file',
)
@click.option(
    '--gcp-project',
    '-p',
    help='GCP project of the destination bucket',
)
@click.option(
    '--log-file',
    '-l',
    help='Also write the audit log to this file',
)
@click.option('--debug', is_flag=True, default=False, help='Enable debug logging')
def main(
    source_dir: str,
    output_dir: str | None,
    gridion_name: str,
    dest_collection: str | None,
    num_replicas: int | None,
    gcp_project: str | None,
    log_file: str | None,
    debug: bool,
):  # pylint: disable=too-many-arguments
    """Audit a GridION run directory against its archived copy."""
    config = AuditConfig.from_cli_args(
        SimpleNamespace(
            source_dir=source_dir,
            output_dir=output_dir,
            gridion_name=gridion_name,
            dest_collection=dest_collection,
            num_replicas=num_replicas,
            gcp_project=gcp_project,
            log_file=log_file,
            debug=debug,
        )
    )

    _, _, num_errors = audit_gridion_run(config)
    sys.exit(1 if num_errors else 0)


if __name__ == '__main__':
    main()  # pylint: disable=no-value-for-parameter
