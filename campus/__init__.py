"""Campus records core: provisioning, codes, admissions conversion, enrollment."""
