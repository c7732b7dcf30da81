class InfraError(Exception):
    """Failure of an outside collaborator (HTTP service or OS process) raised through a port."""
