"""
contact-curator - keeps a contact's relationship fields and its
``## Related`` list in sync through an ordered pipeline of processors.

Packages:
- ``contact_curator.core``      errors, logging, settings
- ``contact_curator.contact``   contact records and relationship codecs
- ``contact_curator.curation``  processor registry, queue, runner, standard processors
- ``contact_curator.cli``       ``contact-curator`` command line
"""

__version__ = "0.1.0"
