"""
Monitoring Module

Contains the availability lookup and the shared state it records:
- Openreach cabinet status check
- Availability state holder read by the status endpoint
"""
