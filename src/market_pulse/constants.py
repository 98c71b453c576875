"""Fixed symbol lists and dataset names tracked by the dashboard."""

NASDAQ_SYMBOLS = (
    "AAPL,MSFT,NVDA,GOOGL,AMZN,META,TSLA,AVGO,PEP,COST,CSCO,TMUS,ADBE,NFLX,AMD,"
    "INTC,QCOM,SBUX,AMGN,ISRG,TXN,HON,BKNG,GILD,ADP,MDLZ,REGN,VRTX,LRCX,ADI"
)
NYSE_SYMBOLS = (
    "JPM,V,WMT,PG,JNJ,MA,HD,BAC,XOM,CVX,KO,LLY,DIS,MCD,PFE,ABBV,MRK,ORCL,CRM,ACN,"
    "T,VZ,NKE,IBM,GE,GS,CAT,MMM,BA,C"
)
BIST_SYMBOLS = (
    "THYAO.IS,GARAN.IS,AKBNK.IS,KCHOL.IS,SAHOL.IS,TUPRS.IS,ASELS.IS,BIMAS.IS,"
    "EREGL.IS,SISE.IS,YKBNK.IS,VAKBN.IS,PETKM.IS,TCELL.IS,FROTO.IS,EKGYO.IS,"
    "HALKB.IS,ARCLK.IS,TOASO.IS,TTKOM.IS,ISCTR.IS,SASA.IS,HEKTS.IS,KOZAL.IS,MGROS.IS"
)
PENNY_STOCKS = "SNDL,ZOM,CTXR,NAKD,GSAT,DNN,ASRT,IDEX,FCEL,OCGN"

# Dataset names published by the aggregator.
CRYPTO = "crypto"
NASDAQ = "nasdaq"
NYSE = "nyse"
BIST = "bist"
PENNY = "penny_stocks"
TRENDING = "trending"

# Datasets searched locally, in lookup order.
SEARCHABLE_DATASETS = (CRYPTO, NASDAQ, NYSE, BIST, PENNY)
ALL_DATASETS = (*SEARCHABLE_DATASETS, TRENDING)
