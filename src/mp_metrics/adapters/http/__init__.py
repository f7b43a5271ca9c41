"""HTTP adapter – push gateway client."""
from mp_metrics.adapters.http.push import PushClient, PushResult, is_success, parse_address, push, push_async

__all__ = ["PushClient", "PushResult", "is_success", "parse_address", "push", "push_async"]
