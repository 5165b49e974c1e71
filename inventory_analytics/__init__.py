"""
Inventory Analytics
===================

Predictive analytics and inventory optimization over snapshots of items and
stock transactions: demand forecasting, reorder points, EOQ, ABC
classification, restocking recommendations and alerts.
"""

__version__ = "1.0.0"
