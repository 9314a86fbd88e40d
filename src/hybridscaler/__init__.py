# src/hybridscaler/__init__.py
"""
Hybrid scaler: decides horizontal and vertical scaling of Kubernetes workloads
by combining ratio-based scaling algorithms with a Q-learning policy.
"""

__version__ = "0.3.0"
