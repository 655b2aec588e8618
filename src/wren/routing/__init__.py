"""Routing — named route templates and URL reversal.

Routes are parsed into an immutable table at configuration time;
``UrlReverser`` renders them into concrete paths.
"""

from wren.routing.reverser import UrlReverser
from wren.routing.route import RouteDefinition
from wren.routing.table import RouteTable, parse_template

__all__ = ["RouteDefinition", "RouteTable", "UrlReverser", "parse_template"]
