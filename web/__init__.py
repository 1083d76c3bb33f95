"""Web front end for Crazy Eights."""
