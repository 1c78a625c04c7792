"""
NASA Mission Control dashboard.

Browse NASA's Astronomy Picture of the Day by date and drill into Mars
rover photos and mission manifests by rover and sol.

:copyright: (c) 2025 by Meir Miyara.
:license: MPL-2.0, see LICENSE for more details.
"""

__version__ = "0.1.0"
__author__ = "Meir Miyara"
__email__ = "meir.miyara@gmail.com"
