"""adactl - Cardano node management for Ubuntu hosts.

Drives the love2automate-ada Ansible playbooks to install, uninstall and
inspect a Cardano node.
"""

__version__ = "0.1.0"
