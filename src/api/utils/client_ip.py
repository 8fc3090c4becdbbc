from typing import Optional

from fastapi import Request


def get_client_ip(request: Request) -> Optional[str]:
    """Get client IP, handling proxies."""
    # Take the first IP in the chain
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip.strip()

    # Fallback to direct connection IP
    return request.client.host if request.client else None
