"""Domain layer: value objects, ports and errors of the Bitfinex client."""
