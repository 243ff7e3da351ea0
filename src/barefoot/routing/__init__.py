"""Routing — ordered regex route table, first match wins."""

from barefoot.routing.route import Route, RouteMatch
from barefoot.routing.router import Router, literal, normalize_path, route

__all__ = ["Route", "RouteMatch", "Router", "literal", "normalize_path", "route"]
