class TraceLogger:
    """Buffered logger writing per-fusion filter decisions to a log file."""

    def __init__(self, log_file_path):
        self.log_file_path = log_file_path
        self._handle = None
        with open(self.log_file_path, 'w') as f:
            f.write(f"# Fusion Tracer Log\n")
            f.write(f"# Log file: {log_file_path}\n\n")

    def _get_file_handle(self):
        if self._handle is None or self._handle.closed:
            self._handle = open(self.log_file_path, 'a', buffering=8192)
        return self._handle

    def log(self, message):
        """Write a trace message to the log file."""
        f = self._get_file_handle()
        f.write(f"{message}\n")

    def log_filter_result(self, fusion_name, filter_name, passed, reason=None):
        """Log a filter result for a traced fusion."""
        status = "PASSED" if passed else "FILTERED"
        msg = f"[TRACE] {fusion_name}: Post-filter: {filter_name} - {status}"
        if reason:
            msg += f" ({reason})"
        self.log(msg)

    def close(self):
        if self._handle is not None and not self._handle.closed:
            self._handle.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
