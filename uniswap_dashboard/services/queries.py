"""GraphQL queries issued against the Uniswap V3 subgraph."""

# Newest first; paged with first/skip by the swaps section.
SWAPS_QUERY = """
query Swaps($first: Int!, $skip: Int!) {
  swaps(first: $first, skip: $skip, orderBy: timestamp, orderDirection: desc) {
    id
    amountUSD
    timestamp
    token0 {
      symbol
    }
    token1 {
      symbol
    }
  }
}
"""

TOKEN_VOLUME_QUERY = """
{
  tokens(first: 5, orderBy: volumeUSD, orderDirection: desc) {
    id
    symbol
    volumeUSD
  }
}
"""

TOP_PAIRS_QUERY = """
{
  pools(first: 5, orderBy: volumeUSD, orderDirection: desc) {
    id
    token0 {
      symbol
    }
    token1 {
      symbol
    }
    volumeUSD
  }
}
"""

# Last 30 days, newest first.
PROTOCOL_STATS_QUERY = """
{
  uniswapDayDatas(first: 30, orderBy: date, orderDirection: desc) {
    date
    tvlUSD
    volumeUSD
    feesUSD
  }
}
"""
