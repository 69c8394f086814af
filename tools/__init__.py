"""Remote clients, photo loading and call instrumentation."""
