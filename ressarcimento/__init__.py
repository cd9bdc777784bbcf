"""ICMS reimbursement engine for solar prosumers."""
