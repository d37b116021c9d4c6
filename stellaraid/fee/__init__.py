"""Transaction fee estimation: calculation, caching, history, surge pricing, currency conversion and fetching the base fee from Horizon."""