"""Keep a Cloudflare A record pointed at this host's public IPv4 address."""

__version__ = "1.0.0"
