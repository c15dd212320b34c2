"""
                Restaurant Ordering API

In-memory data service for a restaurant: dishes, customers and the
orders linking them, exposed over a FastAPI HTTP interface.

Author: Khalil_Bannouri
Version: 1.0.0
License: MIT
"""

__version__ = "1.0.0"
__author__ = "Khalil_Bannouri"
