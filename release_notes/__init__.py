'''
Release Notes (for ranges of versions)

Retrieves the releases of a github repository, and selects those whose tag-names (interpreted
as semver versions, see `version.normalise`) are within a range of versions chosen by users.
The selection may be further reduced by inclusion-toggles (major-, minor-, patch-, beta-, and
rc-releases), whereas range-boundaries are always retained.

Entrypoint for command line usage is `release_notes.cli`.
'''
