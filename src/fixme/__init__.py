"""fixme - scan source trees for comment tags (TODO, FIXME, BUG, ...)"""
