"""A small thread-pool HTTP/1.0 server with static files and CGI, a minimal client and a spin CGI program."""

__version__ = "0.1.0"