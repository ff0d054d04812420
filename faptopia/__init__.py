""" Builds scrollable video galleries from Reddit and 4chan. """
