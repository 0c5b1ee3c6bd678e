"""Syntax tree node types, comments, locations, package ids and error emission."""