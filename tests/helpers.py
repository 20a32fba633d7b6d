from tournament.models import Match, MatchStatus, Tournament, TournamentType


def completed(match_id, court, team1, team2, score1, score2):
    return Match(
        id=match_id, court=court, team1=list(team1), team2=list(team2),
        score1=score1, score2=score2, status=MatchStatus.COMPLETED,
    )


def upcoming(match_id, court, team1, team2):
    return Match(id=match_id, court=court, team1=list(team1), team2=list(team2))


def make_tournament(players, rounds=None, tournament_type=TournamentType.AMERICANO,
                    courts=1, target_value=21):
    return Tournament(
        id="t1",
        name="Friday Padel",
        tournament_type=tournament_type,
        number_of_courts=courts,
        players=list(players),
        target_value=target_value,
        rounds=list(rounds or []),
    )
