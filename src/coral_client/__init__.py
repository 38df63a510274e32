"""Client for services speaking the AWS/QUERY protocol.

Requests are described in memory, encoded into flat query parameters by the
protocol handler, sent over HTTP, and decoded back from the JSON response
envelope.
"""

__version__ = "1.0.0"
