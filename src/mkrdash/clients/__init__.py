from mkrdash.clients.mackerel import MackerelAPIError, MackerelClient

__all__ = ["MackerelAPIError", "MackerelClient"]
