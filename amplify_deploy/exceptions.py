class DeployError(Exception):
    """Base class for every failure surfaced by a deploy invocation."""


class ConfigurationError(DeployError):
    pass


class ClientInitError(DeployError):
    pass


class AmplifyServiceError(DeployError):
    """An Amplify API call failed (transport, auth or service side)."""

    def __init__(self, operation, message, error_code=None):
        self.operation = operation
        self.error_code = error_code
        detail = f"{error_code}: {message}" if error_code else message
        super().__init__(f"{operation} failed: {detail}")


class JobStartError(DeployError):
    pass


class JobQueryError(DeployError):
    pass


class JobFailedError(DeployError):
    def __init__(self, job_id=None):
        self.job_id = job_id
        super().__init__("job failed")


class UnexpectedJobStatusError(DeployError):
    def __init__(self, status, job_id=None):
        self.status = status
        self.job_id = job_id
        super().__init__(f"unexpected job status: {status}")


class DeadlineExceededError(DeployError):
    def __init__(self, timeout, last_status=None):
        self.timeout = timeout
        self.last_status = last_status
        super().__init__(f"deadline exceeded: job did not finish within {timeout}")
