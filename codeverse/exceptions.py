"""Exceptions raised by codeverse."""


class CodeverseError(Exception):
	"""Base exception for codeverse errors."""


class InvalidRepositoryUrlError(CodeverseError):
	"""Raised when a repository URL is not a public GitHub repository URL."""


class CloneError(CodeverseError):
	"""Raised when a repository cannot be cloned."""

	def __init__(self, message: str, url: str = "") -> None:
		super().__init__(message)
		self.url = url


class RepositoryNotFoundError(CloneError):
	"""Raised when the remote repository does not exist or is not public."""


class RepositoryAccessError(CloneError):
	"""Raised when the remote refuses access to the repository."""


class AIUnavailableError(CodeverseError):
	"""Raised when the hosted model is not configured or its call fails."""
