"""Provision and deploy a static single page app on AWS."""
