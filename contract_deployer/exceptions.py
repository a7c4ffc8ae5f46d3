"""Exception hierarchy for the deploy-and-verify workflow.

Fatal errors (configuration, deployment, confirmation) abort the run.
Verification errors never do; the orchestrator classifies them instead.
"""


class DeployerError(Exception):
    """Base exception for all contract-deployer errors."""


class ConfigurationError(DeployerError, ValueError):
    """Raised when settings or artifacts are missing or invalid."""


class ArtifactNotFoundError(ConfigurationError, FileNotFoundError):
    """Raised when a build artifact or contract source file does not exist."""


class DeploymentError(DeployerError):
    """Raised when the contract-creation transaction cannot be completed."""


class ConfirmationError(DeployerError):
    """Raised when waiting for block confirmations fails."""


class ConfirmationTimeoutError(ConfirmationError, TimeoutError):
    """Raised when an opt-in confirmation deadline passes."""


class VerificationError(DeployerError):
    """Raised by a verification service when it rejects a submission."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AlreadyVerifiedError(VerificationError):
    """The explorer already has verified source for this address."""
