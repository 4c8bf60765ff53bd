"""Order aggregate, pricing, ports, adapters, use case and request handler."""