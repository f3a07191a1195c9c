"""Data ingestion from the MK8 ontology SPARQL endpoint."""
