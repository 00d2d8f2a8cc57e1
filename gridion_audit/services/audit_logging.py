import logging

from gridion_audit.models import AuditConfig, CheckCounts


def setup_logger(
    run: str, name: str, level: str = 'INFO', log_file: str | None = None
) -> logging.LoggerAdapter:
    """Set up logger for run audits."""
    logger = logging.getLogger(name)

    # Avoid duplicate handlers
    if logger.handlers:
        return logging.LoggerAdapter(logger, {'run': run})

    formatter = logging.Formatter(
        fmt='%(asctime)s %(levelname)s %(module)s:%(lineno)d - %(run)s :: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    )

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # Optional file handler for audit persistence
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.setLevel(getattr(logging, level.upper()))
    logger.propagate = False

    return logging.LoggerAdapter(logger, {'run': run})


class RunAuditLogger:
    """Logging wrapper for run audit operations."""

    def __init__(
        self,
        run: str,
        name: str = 'gridion_run_audit',
        level: str = 'INFO',
        log_file: str | None = None,
    ):
        """Initialize the audit logger."""
        self.log_file = log_file
        self.logger = setup_logger(run, name, level=level, log_file=log_file)

    def debug(self, message: str):
        """Log a debug message."""
        self.logger.debug(message)

    def info(self, message: str):
        """Log an info message."""
        self.logger.info(message)

    def info_nl(self, message: str):
        """Log an info message and a newline."""
        self.logger.info(message)
        self.logger.info('')

    def warning(self, message: str):
        """Log a warning message."""
        self.logger.warning(message)

    def error(self, message: str):
        """Log an error message."""
        self.logger.error(message)

    def log_initialization(self, config: AuditConfig):
        """Log audit initialization details."""
        self.info('Initializing GridION run audit'.center(50, '~'))
        self.info('')
        self.info(f'GridION:                    {config.gridion_name}')
        self.info(f'Source Directory:           {config.source_dir}')
        if config.output_dir:
            self.info(f'Output Directory:           {config.output_dir}')
        self.info(f'Destination Collection:     {config.dest_collection}')
        self.info(f'Replicas Required:          {config.num_replicas}')
        self.info('')

    def log_counts(self, title: str, counts: CheckCounts):
        """Log the counts of a check."""
        num_files, num_present, num_errors = counts
        self.info(
            f'{title:<28}[ {num_present} / {num_files} ] present, {num_errors} errors'
        )

    def log_summary(self, counts: CheckCounts):
        """Log the audit result summary."""
        self.info_nl('Audit Summary'.center(50, '~'))
        self.info(f'Files checked:              {counts.num_files}')
        self.info(f'Files present:              {counts.num_present}')
        self.info_nl(f'Errors:                     {counts.num_errors}')
