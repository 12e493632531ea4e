"""
Local Greece - Datasets

Ingestion and preprocessing of backend data, one subpackage per dataset.
"""
