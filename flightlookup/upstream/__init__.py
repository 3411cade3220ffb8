"""
Upstream flight data provider integration.
"""

from flightlookup.upstream.aviationstack_client import AviationStackClient, AviationStackError

__all__ = ['AviationStackClient', 'AviationStackError']
