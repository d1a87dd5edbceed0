"""Console front-ends for the expense tracker."""
