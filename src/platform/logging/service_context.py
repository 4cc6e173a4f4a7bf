"""
Service context extraction for log traceability.

Identifies which process emitted a line when several workers share one log stream.
"""

import os
from functools import lru_cache
import socket


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'event-booking')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')

    # Containers expose a short hostname; local runs fall back to the PID
    instance = os.getenv('HOSTNAME') or socket.gethostname() or 'local'
    return f'{service_name}@{deploy_env}:{instance[:12]}:{os.getpid()}'
