from farmtrack.contract.api import Endpoint, api, build_url, endpoints

__all__ = ['Endpoint', 'api', 'build_url', 'endpoints']
