"""
Listing query engine.

Responsibilities:
- Load the fixed collection of property listings from its JSON source.
- Filter the collection with optional search, category, location, price and
  rating predicates.
- Paginate the filtered set and report what was applied.
"""
