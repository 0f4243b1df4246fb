"""Partner network: ownership links and kinship discovery for the CRM."""
