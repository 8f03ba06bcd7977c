"""
Preference profiles, rankings and their validation.

.. important::

    - Preference profiles consist of rankings, one per voter.
    - Voters in a profile are indexed by `0`, ..., `len(profile)-1`
    - Alternatives are arbitrary hashable tokens, by default `"a"`, `"b"`, ...
    - A ranking lists alternatives from most to least preferred.
    - Rankings may be incomplete or contain errors while being edited; they are
      validated before any computation.

"""

import string
from collections import OrderedDict

ALPHABET = string.ascii_lowercase
"""Labels used by `generate_alternatives()`."""


def generate_alternatives(num_alt):
    """
    Return the first `num_alt` letters of the alphabet as alternatives.

    .. doctest::

        >>> generate_alternatives(4)
        ['a', 'b', 'c', 'd']

    Parameters
    ----------
        num_alt : int
            Number of alternatives, at most 26.

    Returns
    -------
        list of str
    """
    if num_alt < 0:
        raise ValueError(f"{num_alt} is not a valid number of alternatives")
    if num_alt > len(ALPHABET):
        raise ValueError(
            f"Cannot generate {num_alt} alternatives, only {len(ALPHABET)} labels available "
            f"(use explicit alternative names instead)."
        )
    return list(ALPHABET[:num_alt])


class InvalidRanking:
    """
    Diagnosis of a ranking that is not a permutation of the alternatives.

    This is a result value, it is never raised.

    Parameters
    ----------
        reason : str
            One of `"not-a-sequence"`, `"length"`, `"empty"`, `"duplicate"`,
            `"unknown-alternative"`.

        entries : list, optional
            The offending entries (for `"duplicate"` and `"unknown-alternative"`).

        ranks : list of int, optional
            Positions (0-based) of the offending entries.

        message : str, optional
            Human-readable description.
    """

    REASONS = ("not-a-sequence", "length", "empty", "duplicate", "unknown-alternative")

    def __init__(self, reason, entries=None, ranks=None, message=None):
        if reason not in self.REASONS:
            raise ValueError(f"Unknown reason {reason} for an invalid ranking.")
        self.reason = reason
        self.entries = list(entries) if entries is not None else []
        self.ranks = list(ranks) if ranks is not None else []
        self.message = message if message is not None else reason

    def __str__(self):
        return self.message

    def __repr__(self):
        return f"{type(self).__name__}({self.reason!r}, entries={self.entries}, ranks={self.ranks})"


class UnknownAlternative(InvalidRanking):
    """A ranking refers to alternatives that are not part of the profile."""

    def __init__(self, entries, ranks):
        super().__init__(
            "unknown-alternative",
            entries=entries,
            ranks=ranks,
            message="unknown alternatives " + ", ".join(repr(entry) for entry in entries),
        )


def _is_empty_entry(entry):
    return entry is None or (isinstance(entry, str) and not entry.strip())


def diagnose_ranking(ranking, universe):
    """
    Check whether `ranking` is a permutation of `universe` and explain why not.

    Never raises, also not for rankings that are still being edited.

    .. doctest::

        >>> print(diagnose_ranking(["a", "c", "b"], "abc"))
        None
        >>> print(diagnose_ranking(["a", "a", "b"], "abc"))
        duplicate entries 'a'
        >>> print(diagnose_ranking(["a", ""], "abc"))
        expected 3 entries, got 2

    Parameters
    ----------
        ranking : Ranking or sequence
            Alternatives from most to least preferred.

        universe : iterable
            All alternatives.

    Returns
    -------
        InvalidRanking or None
            `None` if the ranking is valid.
    """
    if isinstance(ranking, Ranking):
        ranking = ranking.order
    try:
        entries = list(ranking)
        universe = set(universe)
    except TypeError:
        return InvalidRanking("not-a-sequence", message="ranking is not a sequence")

    if len(entries) != len(universe):
        return InvalidRanking(
            "length", message=f"expected {len(universe)} entries, got {len(entries)}"
        )

    empty_ranks = [rank for rank, entry in enumerate(entries) if _is_empty_entry(entry)]
    if empty_ranks:
        return InvalidRanking(
            "empty",
            ranks=empty_ranks,
            message="empty entries at ranks " + ", ".join(str(rank + 1) for rank in empty_ranks),
        )

    seen = set()
    duplicates = []
    duplicate_ranks = []
    unknown = []
    unknown_ranks = []
    for rank, entry in enumerate(entries):
        try:
            hash(entry)
        except TypeError:
            unknown.append(entry)
            unknown_ranks.append(rank)
            continue
        if entry not in universe:
            unknown.append(entry)
            unknown_ranks.append(rank)
        elif entry in seen:
            if entry not in duplicates:
                duplicates.append(entry)
            duplicate_ranks.append(rank)
        seen.add(entry)

    if unknown:
        return UnknownAlternative(unknown, unknown_ranks)
    if duplicates:
        return InvalidRanking(
            "duplicate",
            entries=duplicates,
            ranks=duplicate_ranks,
            message="duplicate entries " + ", ".join(repr(entry) for entry in duplicates),
        )
    return None


def validate_ranking(ranking, universe):
    """
    Verify that `ranking` is a permutation of `universe`.

    Fails if the length differs from the number of alternatives, or if an entry is empty,
    repeated or unknown. Has no side effects and never raises.

    .. doctest::

        >>> validate_ranking(["b", "a", "c"], ["a", "b", "c"])
        True
        >>> validate_ranking(["b", "b", "c"], ["a", "b", "c"])
        False

    Parameters
    ----------
        ranking : Ranking or sequence
            Alternatives from most to least preferred.

        universe : iterable
            All alternatives.

    Returns
    -------
        bool
    """
    return diagnose_ranking(ranking, universe) is None


class Ranking:
    """
    The preferences of one voter: alternatives from most to least preferred.

    A ranking is not validated on construction, because rankings may be edited one
    entry at a time. Use `validate_ranking()` or `Profile.invalid_voters()`.

    Parameters
    ----------
        order : iterable
            Alternatives from most to least preferred.
    """

    def __init__(self, order):
        self.order = tuple(order)

    def __len__(self):
        return len(self.order)

    def __iter__(self):
        return iter(self.order)

    def __getitem__(self, rank):
        return self.order[rank]

    def __eq__(self, other):
        if isinstance(other, Ranking):
            return self.order == other.order
        return NotImplemented

    def __hash__(self):
        return hash(self.order)

    def __str__(self):
        return " > ".join(str(alt) for alt in self.order)

    def __repr__(self):
        return f"Ranking({list(self.order)})"

    @property
    def top(self):
        """The most preferred alternative."""
        return self.order[0]

    def position(self, alternative):
        """
        Return the rank (0-based) of `alternative`.

        Raises `ValueError` if `alternative` does not appear in this ranking.
        """
        return self.order.index(alternative)

    def preferred_to(self, alternative):
        """
        Return all alternatives ranked strictly above `alternative`.

        Parameters
        ----------
            alternative
                An alternative contained in this ranking.

        Returns
        -------
            set
        """
        return set(self.order[: self.position(alternative)])

    def str_with_names(self, alt_names=None):
        """
        Format a Ranking, translating alternatives via `alt_names` if provided.

        Parameters
        ----------
            alt_names : dict, optional
                Display names of alternatives.

        Returns
        -------
            str
        """
        if alt_names is None:
            return str(self)
        return " > ".join(str(alt_names.get(alt, alt)) for alt in self.order)


class Profile:
    """
    Preference profiles.

    A preference profile is a list of rankings (one per voter) over a fixed, ordered
    set of alternatives.

    Parameters
    ----------
        num_alt : int
            Number of alternatives in this profile (may be 0).

        alt_names : sequence, optional
            The alternatives, i.e., a sequence of `num_alt` distinct hashable tokens.

            Defaults to `generate_alternatives(num_alt)`, i.e., `["a", "b", ...]`.

            For example, for `num_alt=3` one could have `alt_names="xyz"`.

    Attributes
    ----------
        alternatives : list

            List of all alternatives in their natural order.
    """

    def __init__(self, num_alt, alt_names=None):
        if num_alt < 0:
            raise ValueError(str(num_alt) + " is not a valid number of alternatives")
        if alt_names is None:
            self.alternatives = generate_alternatives(num_alt)
        else:
            if len(alt_names) < num_alt:
                raise ValueError(
                    f"alt_names {str(alt_names)} has length {len(alt_names)}"
                    f"< num_alt ({num_alt})"
                )
            self.alternatives = [alt_names[i] for i in range(num_alt)]
            if len(set(self.alternatives)) != num_alt:
                raise ValueError(f"alt_names {str(alt_names)} contains duplicates")

        self._rankings = []  # Internal list of rankings.
        # Use `Profile.add_voter()` or `Profile.add_voters()` to add voters

    @classmethod
    def from_grid(cls, grid, alt_names=None):
        """
        Create a profile from an m x n grid, where `grid[rank][voter]` is an alternative.

        Column `voter` of the grid is the ranking of this voter.

        Parameters
        ----------
            grid : list of list
                The grid, one row per rank.

            alt_names : sequence, optional
                The alternatives. Defaults to `generate_alternatives(len(grid))`.

        Returns
        -------
            Profile
        """
        num_alt = len(grid)
        num_voters = len(grid[0]) if grid else 0
        if any(len(row) != num_voters for row in grid):
            raise ValueError("All rows of the grid must have the same length.")
        profile = cls(num_alt, alt_names=alt_names)
        profile.add_voters(
            [grid[rank][voter] for rank in range(num_alt)] for voter in range(num_voters)
        )
        return profile

    @classmethod
    def from_default_grid(cls, num_alt, num_voters, alt_names=None):
        """
        Create a profile where every voter ranks the alternatives in their natural order.

        This is the starting point whenever the number of alternatives or voters changes.

        Parameters
        ----------
            num_alt : int
                Number of alternatives.

            num_voters : int
                Number of voters.

            alt_names : sequence, optional
                The alternatives.

        Returns
        -------
            Profile
        """
        if num_voters < 0:
            raise ValueError(str(num_voters) + " is not a valid number of voters")
        profile = cls(num_alt, alt_names=alt_names)
        profile.add_voters([profile.alternatives] * num_voters)
        return profile

    @property
    def num_alt(self):  # number of alternatives
        """Number of alternatives."""
        return len(self.alternatives)

    @property
    def num_voters(self):
        """Number of voters."""
        return len(self._rankings)

    def __len__(self):
        return len(self._rankings)

    def add_voter(self, ranking):
        """
        Add the ranking of one voter to the preference profile.

        Parameters
        ----------
            ranking : Ranking or iterable
                Alternatives from most to least preferred.

        Returns
        -------
            None
        """
        self._rankings.append(Ranking(ranking))

    def add_voters(self, rankings):
        """
        Add several voters to the preference profile.

        Parameters
        ----------
            rankings : iterable of Ranking or iterable of iterables
                The rankings to be added.

        Returns
        -------
            None
        """
        for ranking in rankings:
            self.add_voter(ranking)

    def set_entry(self, voter, rank, alternative):
        """
        Replace a single entry (a cell of the grid).

        Parameters
        ----------
            voter : int
                Index of the voter (column).

            rank : int
                Position in the ranking (row), 0 is the top.

            alternative
                The new entry; may be invalid (e.g., `""`) while editing.

        Returns
        -------
            None
        """
        order = list(self._rankings[voter].order)
        if rank >= len(order):
            order.extend([None] * (rank + 1 - len(order)))
        order[rank] = alternative
        self._rankings[voter] = Ranking(order)

    def as_grid(self):
        """
        Return the profile as an m x n grid with `grid[rank][voter]`.

        Missing entries of incomplete rankings are `None`.

        Returns
        -------
            list of list
        """
        return [
            [ranking[rank] if rank < len(ranking) else None for ranking in self._rankings]
            for rank in range(self.num_alt)
        ]

    def invalid_voters(self):
        """
        Diagnose all rankings that are not permutations of the alternatives.

        Returns
        -------
            dict of int to InvalidRanking
                Maps voter index to the reason why its ranking is invalid.
        """
        invalid = {}
        for voter, ranking in enumerate(self._rankings):
            diagnosis = diagnose_ranking(ranking, self.alternatives)
            if diagnosis is not None:
                invalid[voter] = diagnosis
        return invalid

    def is_valid(self):
        """
        Verify that every voter's ranking is a permutation of the alternatives.

        Returns
        -------
            bool
        """
        return all(validate_ranking(ranking, self.alternatives) for ranking in self._rankings)

    def __iter__(self):
        return iter(self._rankings)

    def __getitem__(self, i):
        return self._rankings[i]

    def __setitem__(self, i, ranking):
        """
        Replace the ranking of a voter.

        Parameters
        ----------
            ranking : Ranking or iterable
        """
        self._rankings[i] = Ranking(ranking)

    def __str__(self):
        output = f"profile with {len(self._rankings)} voters and {self.num_alt} alternatives:\n"
        for vi, ranking in enumerate(self._rankings):
            output += f" voter {str(vi) + ':':4s} {ranking},\n"
        return output[:-2]

    def copy(self):
        """
        Return a copy of the profile.

        Returns
        -------
            Profile
        """
        copy_profile = Profile(self.num_alt, alt_names=self.alternatives)
        copy_profile.add_voters(self._rankings)
        return copy_profile

    __copy__ = copy
    __deepcopy__ = copy

    def str_compact(self):
        """
        Return a string that compactly summarizes the profile and its voters.

        Identical rankings are merged and printed with their multiplicity.

        Returns
        -------
            str
        """
        compact = OrderedDict()
        for ranking in self._rankings:
            compact[ranking] = compact.get(ranking, 0) + 1
        output = f"profile with {len(self._rankings)} voters and {self.num_alt} alternatives:\n"
        for ranking, count in compact.items():
            output += f" {count} x {ranking},\n"
        output = output[:-2]
        output += "\n"
        return output
