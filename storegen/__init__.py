"""storegen -- interactive generators for Pinia + Firestore stores.

Three generators share one package:

* ``store``    -- state, Firestore actions factory, per-collection action
  modules, store index, activity logger and a Markdown guide.
* ``email``    -- a styled HTML email template.
* ``function`` -- Firebase Cloud Function scaffolding.

Usage::

    python -m storegen            # store generator
    python -m storegen email
    python -m storegen function
"""

__version__ = "0.3.0"
